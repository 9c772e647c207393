"""
Checkout router: coupon preview, payment dispatch and gateway completion.

  1. POST /api/checkout/validate-coupon → preview the discounted total
  2a. POST /api/checkout/create-order   → Razorpay order for the widget
  2b. POST /api/checkout/create-upi     → UPI deep link + QR (manual transfer)
  3. POST /api/payment/verify           → widget success callback (HMAC checked)
     POST /api/payment/cancel           → widget dismissed

The plan price always comes from the CMS, never from the browser.
"""
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.core.exceptions import NotFoundException, ContentUnavailableException, PaymentGatewayException
from app.core.rate_limiter import limiter
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.checkout import (
    CouponCheckRequest,
    CheckoutRequest,
    PriceQuoteOut,
    GatewayOrderResponse,
    ManualPaymentResponse,
)
from app.schemas.content import PricingPlan
from app.schemas.payment import PaymentVerifyRequest, PaymentCancelRequest
from app.services import checkout_service, lead_service
from app.services.checkout_service import Checkout, CustomerDetails
from app.services.cms_service import SanityClient, CMSError, get_cms_client
from app.services.content_service import get_pricing_plan, get_site_settings
from app.services.coupon_service import resolve_price

logger = logging.getLogger(__name__)

router = APIRouter()


def _load_plan(cms: SanityClient, plan_id: str) -> PricingPlan:
    try:
        plan = get_pricing_plan(cms, plan_id)
    except CMSError:
        raise ContentUnavailableException()
    if plan is None:
        raise NotFoundException("Plan")
    return plan


def _start(db: Session, cms: SanityClient, body: CheckoutRequest) -> Checkout:
    """Plan lookup, customer details, best-effort lead, coupon. Ready to dispatch."""
    plan = _load_plan(cms, body.plan_id)
    checkout = Checkout(plan).enter_details(
        CustomerDetails(name=body.name, email=body.email, phone=body.phone)
    )
    lead_service.record_lead_best_effort(
        db,
        name=body.name,
        email=body.email,
        phone=body.phone,
        message=f"Initiated payment for {plan.title}",
    )
    checkout.apply_coupon(cms, body.coupon_code)
    return checkout


@router.post("/checkout/validate-coupon", response_model=ApiResponse[PriceQuoteOut])
@limiter.limit("20/minute")
def validate_coupon(
    request: Request,
    body: CouponCheckRequest,
    cms: SanityClient = Depends(get_cms_client),
):
    plan = _load_plan(cms, body.plan_id)
    quote = resolve_price(cms, plan.price, body.coupon_code)
    return ApiResponse(data=PriceQuoteOut(
        plan_id=plan.plan_id,
        plan_name=plan.title,
        original_price=quote.base_price,
        final_price=quote.final_price,
        discount=quote.discount,
        coupon_code=quote.coupon_code,
    ))


@router.post("/checkout/create-order", response_model=GatewayOrderResponse)
@limiter.limit("10/minute")
def create_order(
    request: Request,
    body: CheckoutRequest,
    db: Session = Depends(get_db),
    cms: SanityClient = Depends(get_cms_client),
):
    checkout = _start(db, cms, body)
    order = checkout.start_gateway(db)
    return GatewayOrderResponse(
        order_id=order.order_id,
        amount=order.amount,
        currency=order.currency,
        key_id=order.key_id,
        plan_id=checkout.plan.plan_id,
    )


@router.post("/checkout/create-upi", response_model=ManualPaymentResponse)
@limiter.limit("10/minute")
def create_upi(
    request: Request,
    body: CheckoutRequest,
    db: Session = Depends(get_db),
    cms: SanityClient = Depends(get_cms_client),
):
    checkout = _start(db, cms, body)

    vpa = settings.upi_vpa
    try:
        site = get_site_settings(cms)
        vpa = site.upi_id or vpa
    except CMSError:
        logger.warning("Site settings unavailable, using configured UPI ID")
    if not vpa:
        raise PaymentGatewayException("UPI payment is not available right now")

    payment = checkout.start_manual_qr(db, vpa=vpa, payee_name=settings.upi_payee_name)
    return ManualPaymentResponse(
        qr_url=payment.qr_url,
        upi_uri=payment.upi_uri,
        amount=payment.amount,
        payment_id=payment.payment_id,
    )


@router.post("/payment/verify", response_model=MessageResponse)
@limiter.limit("10/minute")
def verify_payment(
    request: Request,
    body: PaymentVerifyRequest,
    db: Session = Depends(get_db),
):
    """
    CRITICAL SECURITY STEP:
    The HMAC-SHA256 signature is verified using our Razorpay secret.
    If the signature doesn't match, the payment is marked failed.
    """
    checkout_service.verify_gateway_payment(
        db,
        razorpay_order_id=body.razorpay_order_id,
        razorpay_payment_id=body.razorpay_payment_id,
        razorpay_signature=body.razorpay_signature,
    )
    return MessageResponse(message="Payment verified successfully")


@router.post("/payment/cancel", response_model=MessageResponse)
def cancel_payment(
    body: PaymentCancelRequest,
    db: Session = Depends(get_db),
):
    checkout_service.cancel_gateway_checkout(db, body.razorpay_order_id)
    return MessageResponse(message="Payment cancelled")
