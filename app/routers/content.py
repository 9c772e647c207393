"""
Content router: public, read-only views of the CMS.

GET /api/content/packages?category=healing
GET /api/content/packages/{plan_id}
GET /api/content/testimonials?category=career
GET /api/content/blog
GET /api/content/settings

No auth: the landing page needs these before anyone logs in.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.core.exceptions import ContentUnavailableException, NotFoundException
from app.schemas.common import ApiResponse
from app.schemas.content import PricingPlan, CMSTestimonial, BlogPost, SiteSettings
from app.services import content_service
from app.services.cms_service import SanityClient, CMSError, get_cms_client

router = APIRouter()


@router.get(
    "/packages",
    response_model=ApiResponse[List[PricingPlan]],
    response_model_by_alias=False,
)
def list_packages(
    category: Optional[str] = Query(None, description="healing | mentoria | mentoria-custom"),
    cms: SanityClient = Depends(get_cms_client),
):
    try:
        return ApiResponse(data=content_service.list_pricing_plans(cms, category))
    except CMSError:
        raise ContentUnavailableException()


@router.get(
    "/packages/{plan_id}",
    response_model=ApiResponse[PricingPlan],
    response_model_by_alias=False,
)
def get_package(plan_id: str, cms: SanityClient = Depends(get_cms_client)):
    try:
        plan = content_service.get_pricing_plan(cms, plan_id)
    except CMSError:
        raise ContentUnavailableException()
    if plan is None:
        raise NotFoundException("Plan")
    return ApiResponse(data=plan)


@router.get(
    "/testimonials",
    response_model=ApiResponse[List[CMSTestimonial]],
    response_model_by_alias=False,
)
def list_testimonials(
    category: Optional[str] = Query(None, description="healing | career"),
    cms: SanityClient = Depends(get_cms_client),
):
    try:
        return ApiResponse(data=content_service.list_testimonials(cms, category))
    except CMSError:
        raise ContentUnavailableException()


@router.get("/blog", response_model=ApiResponse[List[BlogPost]], response_model_by_alias=False)
def list_blog_posts(cms: SanityClient = Depends(get_cms_client)):
    try:
        return ApiResponse(data=content_service.list_blog_posts(cms))
    except CMSError:
        raise ContentUnavailableException()


@router.get("/settings", response_model=ApiResponse[SiteSettings], response_model_by_alias=False)
def site_settings(cms: SanityClient = Depends(get_cms_client)):
    try:
        return ApiResponse(data=content_service.get_site_settings(cms))
    except CMSError:
        raise ContentUnavailableException()
