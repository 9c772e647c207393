from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.auth import LoginRequest, SessionUser, SessionResponse
from app.schemas.contact import (
    ContactCreateRequest, LeadRequest, ContactSubmissionOut, ContactCreatedResponse
)
from app.schemas.testimonial import TestimonialIn, TestimonialOut
from app.schemas.blog import BlogIn, BlogOut
from app.schemas.package import PackageIn, PackageOut
from app.schemas.payment import (
    PaymentTrackingCreate, PaymentTrackingIn, PaymentTrackingOut, PaymentStatusUpdate,
    PaymentVerifyRequest, PaymentCancelRequest
)
from app.schemas.checkout import (
    CouponCheckRequest, CheckoutRequest, PriceQuoteOut,
    GatewayOrderResponse, ManualPaymentResponse
)
from app.schemas.content import PricingPlan, Coupon, CMSTestimonial, BlogPost, SiteSettings
