"""
Testimonials router.

GET    /api/testimonials          public, newest first
GET    /api/testimonials/{id}     public
POST   /api/testimonials          admin
PUT    /api/testimonials/{id}     admin, replaces every field
DELETE /api/testimonials/{id}     admin
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.dependencies import get_current_admin
from app.core.exceptions import NotFoundException
from app.models.testimonial import Testimonial
from app.models.user import AdminUser
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.testimonial import TestimonialIn, TestimonialOut

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_or_404(db: Session, testimonial_id: str) -> Testimonial:
    testimonial = db.query(Testimonial).filter(Testimonial.id == testimonial_id).first()
    if not testimonial:
        raise NotFoundException("Testimonial")
    return testimonial


@router.get("", response_model=ApiResponse[List[TestimonialOut]])
def list_testimonials(db: Session = Depends(get_db)):
    testimonials = db.query(Testimonial).order_by(Testimonial.created_at.desc()).all()
    return ApiResponse(data=[TestimonialOut.model_validate(t) for t in testimonials])


@router.get("/{testimonial_id}", response_model=ApiResponse[TestimonialOut])
def get_testimonial(testimonial_id: str, db: Session = Depends(get_db)):
    return ApiResponse(data=TestimonialOut.model_validate(_get_or_404(db, testimonial_id)))


@router.post("", response_model=ApiResponse[TestimonialOut], status_code=201)
def create_testimonial(
    body: TestimonialIn,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    testimonial = Testimonial(**body.model_dump())
    db.add(testimonial)
    db.commit()
    db.refresh(testimonial)
    logger.info(f"create testimonial id={testimonial.id} by={admin.username}")
    return ApiResponse(data=TestimonialOut.model_validate(testimonial))


@router.put("/{testimonial_id}", response_model=ApiResponse[TestimonialOut])
def replace_testimonial(
    testimonial_id: str,
    body: TestimonialIn,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    testimonial = _get_or_404(db, testimonial_id)
    for field, value in body.model_dump().items():
        setattr(testimonial, field, value)
    db.commit()
    db.refresh(testimonial)
    logger.info(f"update testimonial id={testimonial.id} by={admin.username}")
    return ApiResponse(data=TestimonialOut.model_validate(testimonial))


@router.delete("/{testimonial_id}", response_model=MessageResponse)
def delete_testimonial(
    testimonial_id: str,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    testimonial = _get_or_404(db, testimonial_id)
    db.delete(testimonial)
    db.commit()
    logger.info(f"delete testimonial id={testimonial_id} by={admin.username}")
    return MessageResponse(message="Testimonial deleted")
