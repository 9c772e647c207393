from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional

from app.schemas.common import strip_required


class CouponCheckRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plan_id: str = Field(alias="planId", max_length=100)
    coupon_code: str = Field(alias="couponCode", max_length=50)


class CheckoutRequest(BaseModel):
    """
    Body for both dispatch paths (gateway order and UPI QR).
    Customer fields are what the checkout form collects.
    """
    model_config = ConfigDict(populate_by_name=True)

    plan_id: str = Field(alias="planId", max_length=100)
    coupon_code: Optional[str] = Field(default=None, alias="couponCode", max_length=50)
    name: str = Field(max_length=200)
    email: EmailStr
    phone: str = Field(max_length=30)

    @field_validator("name")
    @classmethod
    def name_valid(cls, v: str) -> str:
        v = strip_required(v)
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("phone")
    @classmethod
    def phone_valid(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 10:
            raise ValueError("Please enter a valid 10-digit mobile number")
        return v

    @field_validator("coupon_code")
    @classmethod
    def blank_code_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v


class PriceQuoteOut(BaseModel):
    plan_id: str
    plan_name: str
    original_price: int
    final_price: int
    discount: int
    coupon_code: Optional[str] = None


class GatewayOrderResponse(BaseModel):
    """Returned to frontend to open the Razorpay checkout widget."""
    success: bool = True
    order_id: str
    amount: int            # paise (rupees × 100)
    currency: str = "INR"
    key_id: str            # public key the widget needs
    plan_id: str


class ManualPaymentResponse(BaseModel):
    success: bool = True
    qr_url: str            # data:image/png;base64,...
    upi_uri: str
    amount: int            # rupees
    payment_id: str
