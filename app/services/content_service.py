"""
Content queries against the CMS.
Each function runs one parametrized GROQ query and maps the documents
into schemas. A document that does not fit its schema is reported as
CMSError, same as an unreachable CMS; routers turn it into a 502.
"""
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.schemas.content import PricingPlan, Coupon, CMSTestimonial, BlogPost, SiteSettings
from app.services.cms_service import SanityClient, CMSError

DocModel = TypeVar("DocModel", bound=BaseModel)

PLAN_PROJECTION = """{
  planId, title, description, price, duration, features, isPopular,
  category, paymentType, subgroup, order, image
}"""


def _parse(model: Type[DocModel], doc: dict) -> DocModel:
    try:
        return model.model_validate(doc)
    except ValidationError as exc:
        raise CMSError(f"Malformed {model.__name__} document: {exc.error_count()} error(s)") from exc


def _to_plan(cms: SanityClient, doc: dict) -> PricingPlan:
    plan = _parse(PricingPlan, doc)
    plan.image_url = cms.image_url(doc.get("image"))
    return plan


def list_pricing_plans(cms: SanityClient, category: Optional[str] = None) -> List[PricingPlan]:
    if category:
        query = f'*[_type == "pricing" && category == $category] | order(order asc) {PLAN_PROJECTION}'
        docs = cms.fetch(query, {"category": category})
    else:
        query = f'*[_type == "pricing"] | order(order asc) {PLAN_PROJECTION}'
        docs = cms.fetch(query)
    return [_to_plan(cms, doc) for doc in docs or []]


def get_pricing_plan(cms: SanityClient, plan_id: str) -> Optional[PricingPlan]:
    """The plan is the price source of truth for checkout."""
    doc = cms.fetch(
        f'*[_type == "pricing" && planId == $planId][0] {PLAN_PROJECTION}',
        {"planId": plan_id},
    )
    if not doc:
        return None
    return _to_plan(cms, doc)


def find_coupon(cms: SanityClient, code: str) -> Optional[Coupon]:
    """
    Active coupon with this exact code, or None.
    The caller normalizes the code.
    """
    doc = cms.fetch(
        '*[_type == "coupon" && code == $code && isActive == true][0]'
        '{code, discountType, discountAmount, expiryDate, isActive}',
        {"code": code},
    )
    if not doc:
        return None
    return _parse(Coupon, doc)


def list_testimonials(cms: SanityClient, category: Optional[str] = None) -> List[CMSTestimonial]:
    if category:
        # Documents created before categories existed count as "healing"
        if category == "healing":
            query = ('*[_type == "testimonial" && (category == $category || !defined(category))]'
                     '{name, role, content, rating, category}')
        else:
            query = ('*[_type == "testimonial" && category == $category]'
                     '{name, role, content, rating, category}')
        docs = cms.fetch(query, {"category": category})
    else:
        docs = cms.fetch('*[_type == "testimonial"]{name, role, content, rating, category}')
    return [_parse(CMSTestimonial, doc) for doc in docs or []]


def list_blog_posts(cms: SanityClient) -> List[BlogPost]:
    docs = cms.fetch(
        '*[_type == "post"] | order(publishedAt desc) {'
        '_id, title, "slug": slug.current, excerpt, publishedAt,'
        ' mainImage { asset->{_id, url}, alt }}'
    )
    posts = []
    for doc in docs or []:
        post = _parse(BlogPost, doc)
        image = doc.get("mainImage") or {}
        post.image_url = cms.image_url(image)
        post.image_alt = image.get("alt")
        posts.append(post)
    return posts


def get_site_settings(cms: SanityClient) -> SiteSettings:
    doc = cms.fetch('*[_type == "siteSettings"][0]{siteTitle, description, upiId, upiQrCode}')
    if not doc:
        return SiteSettings()
    site = _parse(SiteSettings, doc)
    site.upi_qr_image_url = cms.image_url(doc.get("upiQrCode"))
    return site
