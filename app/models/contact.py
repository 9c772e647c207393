from sqlalchemy import Column, String, Text, TIMESTAMP, Enum as SAEnum
from sqlalchemy.sql import func
from app.database import Base
from app.models.user import new_id


class ContactSubmission(Base):
    """
    Contact form entries and captured leads.
    Records are INSERT-only: never updated or deleted through the API.

    source="contact": the full contact form (phone, purpose, message required)
    source="lead":    /submit-lead and the best-effort log written before checkout
    """
    __tablename__ = "contact_submissions"

    id = Column(String(36), primary_key=True, default=new_id, nullable=False)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(30), nullable=True)
    purpose = Column(String(200), nullable=False, default="General Inquiry",
                     server_default="General Inquiry")
    message = Column(Text, nullable=True)
    source = Column(
        SAEnum("contact", "lead", name="submission_source"),
        nullable=False,
        server_default="contact",
    )
    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
