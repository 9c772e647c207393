"""
Lead capture: POST /submit-lead.

Inserts the lead and, when LEAD_NOTIFY_EMAIL is configured, queues an
email to the business inbox. The email goes out after the response is sent;
its failure never changes the response.
"""
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.rate_limiter import limiter
from app.schemas.common import MessageResponse
from app.schemas.contact import LeadRequest
from app.services import lead_service
from app.services.email_service import send_lead_notification

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/submit-lead", response_model=MessageResponse)
@limiter.limit("5/minute")
async def submit_lead(
    request: Request,
    body: LeadRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    lead = lead_service.create_submission(
        db,
        name=body.name,
        email=body.email,
        phone=body.phone,
        message=body.message,
        source="lead",
    )
    logger.info(f"Lead captured: id={lead.id}")

    background_tasks.add_task(
        send_lead_notification, body.name, body.email, body.phone, body.message
    )
    return MessageResponse(message="Lead captured successfully")
