"""
Shapes of the CMS documents we read. Field aliases follow the CMS field
names (camelCase); responses are serialized with the snake_case names.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime


class CMSDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PricingPlan(CMSDocument):
    plan_id: str = Field(alias="planId")
    title: str
    description: Optional[str] = None
    price: int = Field(ge=0)
    duration: Optional[str] = None
    features: List[str] = []
    is_popular: bool = Field(default=False, alias="isPopular")
    category: Optional[str] = None
    payment_type: Optional[str] = Field(default="razorpay", alias="paymentType")
    subgroup: Optional[str] = None
    order: Optional[int] = 0
    image_url: Optional[str] = None

    @field_validator("features", mode="before")
    @classmethod
    def null_features(cls, v):
        return v or []

    @field_validator("is_popular", mode="before")
    @classmethod
    def null_flag(cls, v):
        return bool(v)


class Coupon(CMSDocument):
    code: str
    discount_type: str = Field(alias="discountType")
    discount_amount: float = Field(alias="discountAmount")
    expiry_date: Optional[datetime] = Field(default=None, alias="expiryDate")
    is_active: bool = Field(default=True, alias="isActive")


class CMSTestimonial(CMSDocument):
    name: str
    role: Optional[str] = None
    content: str
    rating: Optional[int] = None
    category: Optional[str] = None


class BlogPost(CMSDocument):
    id: str = Field(alias="_id")
    title: str
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")
    image_url: Optional[str] = None
    image_alt: Optional[str] = None


class SiteSettings(CMSDocument):
    site_title: Optional[str] = Field(default=None, alias="siteTitle")
    description: Optional[str] = None
    upi_id: Optional[str] = Field(default=None, alias="upiId")
    upi_qr_image_url: Optional[str] = None
