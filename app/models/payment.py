from sqlalchemy import Column, Integer, String, TIMESTAMP, Enum as SAEnum
from sqlalchemy.sql import func
from app.database import Base
from app.models.user import new_id

PAYMENT_STATUSES = ("pending", "success", "failed", "cancelled")
ORDER_STATUSES = ("created", "paid", "cancelled", "failed_invalid_signature")


class PaymentTracking(Base):
    """
    One row per checkout dispatch, shown in the admin payments screen.

    Status only moves through an admin update or the gateway verification
    callback. UPI rows stay "pending" until an admin confirms the transfer.
    """
    __tablename__ = "payment_tracking"

    id = Column(String(36), primary_key=True, default=new_id, nullable=False)
    # Null for manual UPI payments
    razorpay_order_id = Column(String(100), nullable=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=False)
    package_id = Column(String(100), nullable=False)
    package_name = Column(String(200), nullable=False)
    amount = Column(Integer, nullable=True, comment="Final charge in rupees, after coupon")
    coupon_code = Column(String(50), nullable=True)
    payment_method = Column(
        SAEnum("razorpay", "upi", name="payment_method"),
        nullable=False,
        server_default="razorpay",
    )
    status = Column(
        SAEnum(*PAYMENT_STATUSES, name="payment_status"),
        nullable=False,
        default="pending",
        server_default="pending",
    )
    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class RazorpayOrder(Base):
    """
    Gateway order as we created it. Verification reads the amount from here,
    never from the browser.
    """
    __tablename__ = "razorpay_orders"

    id = Column(String(36), primary_key=True, default=new_id, nullable=False)
    razorpay_order_id = Column(String(100), unique=True, nullable=False, index=True)
    package_id = Column(String(100), nullable=False)
    package_name = Column(String(200), nullable=False)
    base_amount = Column(Integer, nullable=False, comment="Plan price before coupon, rupees")
    amount = Column(Integer, nullable=False, comment="Charged amount, rupees")
    coupon_code = Column(String(50), nullable=True)
    customer_name = Column(String(200), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(30), nullable=False)
    status = Column(
        SAEnum(*ORDER_STATUSES, name="razorpay_order_status"),
        nullable=False,
        default="created",
        server_default="created",
    )
    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
