# models/__init__.py
# Import all models here so that:
# 1. Alembic's env.py can import this single module and detect all tables.
# 2. Base.metadata.create_all() in tests sees every table.

from app.models.user import AdminUser, AdminSession
from app.models.contact import ContactSubmission
from app.models.testimonial import Testimonial
from app.models.blog import Blog
from app.models.package import Package
from app.models.payment import PaymentTracking, RazorpayOrder

__all__ = [
    "AdminUser",
    "AdminSession",
    "ContactSubmission",
    "Testimonial",
    "Blog",
    "Package",
    "PaymentTracking",
    "RazorpayOrder",
]
