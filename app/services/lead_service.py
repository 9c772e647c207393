"""
Lead and contact-submission writes. Both end up in contact_submissions.
"""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.contact import ContactSubmission

logger = logging.getLogger(__name__)


def create_submission(
    db: Session,
    name: str,
    email: str,
    phone: Optional[str] = None,
    purpose: str = "General Inquiry",
    message: Optional[str] = None,
    source: str = "contact",
) -> ContactSubmission:
    submission = ContactSubmission(
        name=name,
        email=email,
        phone=phone,
        purpose=purpose,
        message=message,
        source=source,
    )
    db.add(submission)
    db.commit()
    db.refresh(submission)
    return submission


def record_lead_best_effort(
    db: Session,
    name: str,
    email: str,
    phone: Optional[str],
    message: str,
) -> Optional[ContactSubmission]:
    """
    Log a lead before a checkout dispatch.
    A database failure here must not block the payment, so it is logged and
    the session rolled back; the caller gets None.
    """
    try:
        return create_submission(
            db, name=name, email=email, phone=phone,
            purpose="Checkout", message=message, source="lead",
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning(f"Could not record checkout lead for {email}: {exc}")
        return None
