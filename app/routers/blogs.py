"""
Blogs router.

GET    /api/blogs          public, newest first
GET    /api/blogs/{id}     public
POST   /api/blogs          admin
PUT    /api/blogs/{id}     admin, replaces every field
DELETE /api/blogs/{id}     admin
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.dependencies import get_current_admin
from app.core.exceptions import NotFoundException
from app.models.blog import Blog
from app.models.user import AdminUser
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.blog import BlogIn, BlogOut

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_or_404(db: Session, blog_id: str) -> Blog:
    blog = db.query(Blog).filter(Blog.id == blog_id).first()
    if not blog:
        raise NotFoundException("Blog")
    return blog


@router.get("", response_model=ApiResponse[List[BlogOut]])
def list_blogs(db: Session = Depends(get_db)):
    blogs = db.query(Blog).order_by(Blog.created_at.desc()).all()
    return ApiResponse(data=[BlogOut.model_validate(b) for b in blogs])


@router.get("/{blog_id}", response_model=ApiResponse[BlogOut])
def get_blog(blog_id: str, db: Session = Depends(get_db)):
    return ApiResponse(data=BlogOut.model_validate(_get_or_404(db, blog_id)))


@router.post("", response_model=ApiResponse[BlogOut], status_code=201)
def create_blog(
    body: BlogIn,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    blog = Blog(**body.model_dump())
    db.add(blog)
    db.commit()
    db.refresh(blog)
    logger.info(f"create blog id={blog.id} by={admin.username}")
    return ApiResponse(data=BlogOut.model_validate(blog))


@router.put("/{blog_id}", response_model=ApiResponse[BlogOut])
def replace_blog(
    blog_id: str,
    body: BlogIn,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    blog = _get_or_404(db, blog_id)
    for field, value in body.model_dump().items():
        setattr(blog, field, value)
    db.commit()
    db.refresh(blog)
    logger.info(f"update blog id={blog.id} by={admin.username}")
    return ApiResponse(data=BlogOut.model_validate(blog))


@router.delete("/{blog_id}", response_model=MessageResponse)
def delete_blog(
    blog_id: str,
    db: Session = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin),
):
    blog = _get_or_404(db, blog_id)
    db.delete(blog)
    db.commit()
    logger.info(f"delete blog id={blog_id} by={admin.username}")
    return MessageResponse(message="Blog deleted")
