"""
Payment-tracking records.

POST   /api/payments               public (records a manual booking, always "pending")
GET    /api/payments               admin, newest first
GET    /api/payments/{id}          admin
PUT    /api/payments/{id}          admin, replaces every field
PATCH  /api/payments/{id}/status   admin, status only (e.g. confirming a UPI transfer)
DELETE /api/payments/{id}          admin
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.dependencies import get_current_admin
from app.core.exceptions import NotFoundException
from app.core.rate_limiter import limiter
from app.models.payment import PaymentTracking
from app.models.user import AdminUser
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.payment import (
    PaymentTrackingCreate,
    PaymentTrackingIn,
    PaymentTrackingOut,
    PaymentStatusUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_or_404(db: Session, payment_id: str) -> PaymentTracking:
    payment = db.query(PaymentTracking).filter(PaymentTracking.id == payment_id).first()
    if not payment:
        raise NotFoundException("Payment")
    return payment


@router.post("", response_model=ApiResponse[PaymentTrackingOut], status_code=201)
@limiter.limit("10/minute")
def create_payment(
    request: Request,
    body: PaymentTrackingCreate,
    db: Session = Depends(get_db),
):
    payment = PaymentTracking(**body.model_dump(), status="pending")
    db.add(payment)
    db.commit()
    db.refresh(payment)
    return ApiResponse(data=PaymentTrackingOut.model_validate(payment))


@router.get("", response_model=ApiResponse[List[PaymentTrackingOut]])
def list_payments(
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    payments = db.query(PaymentTracking).order_by(PaymentTracking.created_at.desc()).all()
    return ApiResponse(data=[PaymentTrackingOut.model_validate(p) for p in payments])


@router.get("/{payment_id}", response_model=ApiResponse[PaymentTrackingOut])
def get_payment(
    payment_id: str,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    return ApiResponse(data=PaymentTrackingOut.model_validate(_get_or_404(db, payment_id)))


@router.put("/{payment_id}", response_model=ApiResponse[PaymentTrackingOut])
def replace_payment(
    payment_id: str,
    body: PaymentTrackingIn,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    payment = _get_or_404(db, payment_id)
    for field, value in body.model_dump().items():
        setattr(payment, field, value)
    db.commit()
    db.refresh(payment)
    logger.info(f"update payment id={payment.id} status={payment.status} by={admin.username}")
    return ApiResponse(data=PaymentTrackingOut.model_validate(payment))


@router.patch("/{payment_id}/status", response_model=ApiResponse[PaymentTrackingOut])
def update_payment_status(
    payment_id: str,
    body: PaymentStatusUpdate,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    payment = _get_or_404(db, payment_id)
    previous = payment.status
    payment.status = body.status
    db.commit()
    db.refresh(payment)
    logger.info(
        f"update payment status id={payment.id} {previous}->{payment.status} by={admin.username}"
    )
    return ApiResponse(data=PaymentTrackingOut.model_validate(payment))


@router.delete("/{payment_id}", response_model=MessageResponse)
def delete_payment(
    payment_id: str,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    payment = _get_or_404(db, payment_id)
    db.delete(payment)
    db.commit()
    logger.info(f"delete payment id={payment_id} by={admin.username}")
    return MessageResponse(message="Payment deleted")
