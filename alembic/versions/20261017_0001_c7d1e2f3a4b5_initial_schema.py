"""initial schema

Revision ID: c7d1e2f3a4b5
Revises:
Create Date: 2026-10-17

Tables:
  users                admin accounts (created from the CLI)
  user_sessions        server-side admin sessions, cascade with users
  contact_submissions  contact form entries and leads (source column)
  testimonials         admin-managed testimonials
  blogs                admin-managed blog posts
  packages             admin-managed service packages
  payment_tracking     one row per checkout dispatch
  razorpay_orders      gateway orders as created, read back on verification
"""
from alembic import op
import sqlalchemy as sa

revision = 'c7d1e2f3a4b5'
down_revision = None
branch_labels = None
depends_on = None


def _created_at(index: bool = False) -> sa.Column:
    return sa.Column(
        'created_at', sa.TIMESTAMP(timezone=True),
        server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False, index=index,
    )


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True, nullable=False),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        _created_at(),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'user_sessions',
        sa.Column('id', sa.String(64), primary_key=True, nullable=False),
        sa.Column('user_id', sa.String(36),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('expires_at', sa.TIMESTAMP(timezone=True), nullable=False),
        _created_at(),
    )
    op.create_index('ix_user_sessions_user_id', 'user_sessions', ['user_id'])
    op.create_index('ix_user_sessions_expires_at', 'user_sessions', ['expires_at'])

    op.create_table(
        'contact_submissions',
        sa.Column('id', sa.String(36), primary_key=True, nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('purpose', sa.String(200), server_default='General Inquiry', nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('source', sa.Enum('contact', 'lead', name='submission_source'),
                  server_default='contact', nullable=False),
        _created_at(),
    )
    op.create_index('ix_contact_submissions_email', 'contact_submissions', ['email'])
    op.create_index('ix_contact_submissions_created_at', 'contact_submissions', ['created_at'])

    op.create_table(
        'testimonials',
        sa.Column('id', sa.String(36), primary_key=True, nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('role', sa.String(200), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(50), server_default='healing', nullable=False),
        sa.Column('image_url', sa.String(500), nullable=True),
        _created_at(),
    )

    op.create_table(
        'blogs',
        sa.Column('id', sa.String(36), primary_key=True, nullable=False),
        sa.Column('title', sa.String(300), nullable=False),
        sa.Column('excerpt', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('author', sa.String(200), nullable=False),
        sa.Column('image_url', sa.String(500), nullable=True),
        _created_at(),
    )

    op.create_table(
        'packages',
        sa.Column('id', sa.String(36), primary_key=True, nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('duration', sa.String(100), nullable=False),
        sa.Column('features', sa.JSON(), nullable=False),
        sa.Column('is_popular', sa.Boolean(), server_default='false', nullable=False),
        _created_at(),
    )

    op.create_table(
        'payment_tracking',
        sa.Column('id', sa.String(36), primary_key=True, nullable=False),
        sa.Column('razorpay_order_id', sa.String(100), nullable=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(30), nullable=False),
        sa.Column('package_id', sa.String(100), nullable=False),
        sa.Column('package_name', sa.String(200), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=True),
        sa.Column('coupon_code', sa.String(50), nullable=True),
        sa.Column('payment_method', sa.Enum('razorpay', 'upi', name='payment_method'),
                  server_default='razorpay', nullable=False),
        sa.Column('status',
                  sa.Enum('pending', 'success', 'failed', 'cancelled', name='payment_status'),
                  server_default='pending', nullable=False),
        _created_at(),
    )
    op.create_index('ix_payment_tracking_razorpay_order_id', 'payment_tracking',
                    ['razorpay_order_id'])

    op.create_table(
        'razorpay_orders',
        sa.Column('id', sa.String(36), primary_key=True, nullable=False),
        sa.Column('razorpay_order_id', sa.String(100), nullable=False),
        sa.Column('package_id', sa.String(100), nullable=False),
        sa.Column('package_name', sa.String(200), nullable=False),
        sa.Column('base_amount', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('coupon_code', sa.String(50), nullable=True),
        sa.Column('customer_name', sa.String(200), nullable=False),
        sa.Column('customer_email', sa.String(255), nullable=False),
        sa.Column('customer_phone', sa.String(30), nullable=False),
        sa.Column('status',
                  sa.Enum('created', 'paid', 'cancelled', 'failed_invalid_signature',
                          name='razorpay_order_status'),
                  server_default='created', nullable=False),
        _created_at(),
    )
    op.create_index('ix_razorpay_orders_razorpay_order_id', 'razorpay_orders',
                    ['razorpay_order_id'], unique=True)


def downgrade() -> None:
    op.drop_table('razorpay_orders')
    op.drop_table('payment_tracking')
    op.drop_table('packages')
    op.drop_table('blogs')
    op.drop_table('testimonials')
    op.drop_table('contact_submissions')
    op.drop_table('user_sessions')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_name in ('razorpay_order_status', 'payment_status', 'payment_method',
                      'submission_source'):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)
