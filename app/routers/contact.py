"""
Contact submissions.

POST /api/contact  public contact form
GET  /api/contact  admin, every submission and lead, newest first

Submissions are append-only; there is no update or delete.
"""
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.dependencies import get_current_admin
from app.core.rate_limiter import limiter
from app.models.contact import ContactSubmission
from app.models.user import AdminUser
from app.schemas.common import ApiResponse
from app.schemas.contact import ContactCreateRequest, ContactCreatedResponse, ContactSubmissionOut
from app.services import lead_service

router = APIRouter()


@router.post("", response_model=ContactCreatedResponse)
@limiter.limit("5/minute")
def submit_contact(
    request: Request,
    body: ContactCreateRequest,
    db: Session = Depends(get_db),
):
    submission = lead_service.create_submission(
        db,
        name=body.name,
        email=body.email,
        phone=body.phone,
        purpose=body.purpose,
        message=body.message,
        source="contact",
    )
    return ContactCreatedResponse(
        message="Contact form submitted successfully",
        id=submission.id,
    )


@router.get("", response_model=ApiResponse[List[ContactSubmissionOut]])
def list_submissions(
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    submissions = (
        db.query(ContactSubmission)
        .order_by(ContactSubmission.created_at.desc())
        .all()
    )
    return ApiResponse(data=[ContactSubmissionOut.model_validate(s) for s in submissions])
