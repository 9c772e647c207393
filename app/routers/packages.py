"""
Packages router.

GET    /api/packages          public, newest first
GET    /api/packages/{id}     public
POST   /api/packages          admin
PUT    /api/packages/{id}     admin, replaces every field
DELETE /api/packages/{id}     admin
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.dependencies import get_current_admin
from app.core.exceptions import NotFoundException
from app.models.package import Package
from app.models.user import AdminUser
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.package import PackageIn, PackageOut

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_or_404(db: Session, package_id: str) -> Package:
    package = db.query(Package).filter(Package.id == package_id).first()
    if not package:
        raise NotFoundException("Package")
    return package


@router.get("", response_model=ApiResponse[List[PackageOut]])
def list_packages(db: Session = Depends(get_db)):
    packages = db.query(Package).order_by(Package.created_at.desc()).all()
    return ApiResponse(data=[PackageOut.model_validate(p) for p in packages])


@router.get("/{package_id}", response_model=ApiResponse[PackageOut])
def get_package(package_id: str, db: Session = Depends(get_db)):
    return ApiResponse(data=PackageOut.model_validate(_get_or_404(db, package_id)))


@router.post("", response_model=ApiResponse[PackageOut], status_code=201)
def create_package(
    body: PackageIn,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    package = Package(**body.model_dump())
    db.add(package)
    db.commit()
    db.refresh(package)
    logger.info(f"create package id={package.id} by={admin.username}")
    return ApiResponse(data=PackageOut.model_validate(package))


@router.put("/{package_id}", response_model=ApiResponse[PackageOut])
def replace_package(
    package_id: str,
    body: PackageIn,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    package = _get_or_404(db, package_id)
    for field, value in body.model_dump().items():
        setattr(package, field, value)
    db.commit()
    db.refresh(package)
    logger.info(f"update package id={package.id} by={admin.username}")
    return ApiResponse(data=PackageOut.model_validate(package))


@router.delete("/{package_id}", response_model=MessageResponse)
def delete_package(
    package_id: str,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    package = _get_or_404(db, package_id)
    db.delete(package)
    db.commit()
    logger.info(f"delete package id={package_id} by={admin.username}")
    return MessageResponse(message="Package deleted")
