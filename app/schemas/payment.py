from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict
from typing import Literal, Optional
from datetime import datetime

from app.schemas.common import strip_required

PaymentStatus = Literal["pending", "success", "failed", "cancelled"]


class PaymentTrackingCreate(BaseModel):
    """Public create body. New records always start as "pending"."""
    razorpay_order_id: Optional[str] = Field(default=None, max_length=100)
    name: str = Field(max_length=200)
    email: EmailStr
    phone: str = Field(max_length=30)
    package_id: str = Field(max_length=100)
    package_name: str = Field(max_length=200)
    amount: Optional[int] = None
    coupon_code: Optional[str] = Field(default=None, max_length=50)
    payment_method: Literal["razorpay", "upi"] = "razorpay"

    @field_validator("name", "phone", "package_id", "package_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("amount")
    @classmethod
    def amount_not_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("amount must not be negative")
        return v


class PaymentTrackingIn(PaymentTrackingCreate):
    """Admin PUT body: replaces every field, status included."""
    status: PaymentStatus = "pending"


class PaymentStatusUpdate(BaseModel):
    status: PaymentStatus


class PaymentTrackingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    razorpay_order_id: Optional[str] = None
    name: str
    email: str
    phone: str
    package_id: str
    package_name: str
    amount: Optional[int] = None
    coupon_code: Optional[str] = None
    payment_method: str
    status: str
    created_at: datetime


class PaymentVerifyRequest(BaseModel):
    """
    Frontend sends this after the Razorpay widget reports success.
    All three fields come from Razorpay's checkout callback.
    """
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str


class PaymentCancelRequest(BaseModel):
    razorpay_order_id: str
