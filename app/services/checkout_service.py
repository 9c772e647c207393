"""
Checkout: from a chosen plan to a payment dispatch.

State machine:

    IDLE ──enter_details──▶ DETAILS_ENTERED ──start_gateway───▶ GATEWAY_CHECKOUT ──resolve──▶ RESOLVED
                                  │           ──start_manual_qr─▶ MANUAL_QR
                                  └── cancel() from any unresolved state returns to IDLE

  - A coupon may be applied or cleared only in DETAILS_ENTERED. A rejected
    code leaves the current quote untouched.
  - GATEWAY_CHECKOUT resolves only through the widget's completion callback
    (verify_gateway_payment). There is no polling and no webhook.
  - MANUAL_QR never resolves on its own: the payment row stays "pending"
    until an admin updates it.
  - Cancelling persists nothing. A gateway cancel marks the Razorpay order
    record only; the payment-tracking status is left as it was.

One Checkout object lives for one request, and in the web flow it ends at
dispatch. The widget callback and the widget-close arrive as separate
requests, so verify_gateway_payment and cancel_gateway_checkout apply the
RESOLVED and IDLE transitions to the stored RazorpayOrder instead:

    order "created" ──verify, good signature──▶ "paid"
                    ──verify, bad signature───▶ "failed_invalid_signature"
                    ──cancel──────────────────▶ "cancelled"

Checkout.cancel() and Checkout.resolve() are the same transitions for
callers that hold the object through to completion.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.core.exceptions import CheckoutStateException, NotFoundException, InvalidSignatureException
from app.models.payment import PaymentTracking, RazorpayOrder
from app.schemas.content import PricingPlan
from app.services import razorpay_service, upi_service
from app.services.cms_service import SanityClient
from app.services.coupon_service import PriceQuote, resolve_price

logger = logging.getLogger(__name__)


class CheckoutState(str, Enum):
    IDLE = "idle"
    DETAILS_ENTERED = "details_entered"
    GATEWAY_CHECKOUT = "gateway_checkout"
    MANUAL_QR = "manual_qr"
    RESOLVED = "resolved"


class CheckoutOutcome(str, Enum):
    SUCCESS = "success"
    CANCELLED = "cancelled"
    FAILED = "failed"


TRANSITIONS = {
    CheckoutState.IDLE: {CheckoutState.DETAILS_ENTERED},
    CheckoutState.DETAILS_ENTERED: {
        CheckoutState.DETAILS_ENTERED,
        CheckoutState.GATEWAY_CHECKOUT,
        CheckoutState.MANUAL_QR,
        CheckoutState.IDLE,
    },
    CheckoutState.GATEWAY_CHECKOUT: {CheckoutState.RESOLVED, CheckoutState.IDLE},
    CheckoutState.MANUAL_QR: {CheckoutState.IDLE},
    CheckoutState.RESOLVED: set(),
}


@dataclass(frozen=True)
class CustomerDetails:
    name: str
    email: str
    phone: str


@dataclass(frozen=True)
class GatewayOrder:
    order_id: str
    amount: int         # paise
    currency: str
    key_id: str


@dataclass(frozen=True)
class ManualPayment:
    payment_id: str
    upi_uri: str
    qr_url: str
    amount: int         # rupees


class Checkout:
    def __init__(self, plan: PricingPlan):
        self.plan = plan
        self.state = CheckoutState.IDLE
        self.customer: Optional[CustomerDetails] = None
        self.quote = PriceQuote(base_price=plan.price, final_price=plan.price)
        self.outcome: Optional[CheckoutOutcome] = None

    @property
    def amount(self) -> int:
        return self.quote.final_price

    def _move(self, target: CheckoutState, action: str) -> None:
        if target not in TRANSITIONS[self.state]:
            raise CheckoutStateException(action, self.state.value)
        self.state = target

    def _require(self, state: CheckoutState, action: str) -> None:
        if self.state != state:
            raise CheckoutStateException(action, self.state.value)

    # ── Details & coupon ──────────────────────────────────────────────────────

    def enter_details(self, customer: CustomerDetails) -> "Checkout":
        self._move(CheckoutState.DETAILS_ENTERED, "enter details")
        self.customer = customer
        return self

    def apply_coupon(
        self,
        cms: SanityClient,
        code: Optional[str],
        now: Optional[datetime] = None,
    ) -> PriceQuote:
        """Re-price against the base price. Raises on any rejection, quote unchanged."""
        self._require(CheckoutState.DETAILS_ENTERED, "apply coupon")
        quote = resolve_price(cms, self.plan.price, code, now=now)
        self.quote = quote
        return quote

    def clear_coupon(self) -> PriceQuote:
        self._require(CheckoutState.DETAILS_ENTERED, "clear coupon")
        self.quote = PriceQuote(base_price=self.plan.price, final_price=self.plan.price)
        return self.quote

    # ── Dispatch ──────────────────────────────────────────────────────────────

    def _tracking_row(self, method: str, order_id: Optional[str] = None) -> PaymentTracking:
        return PaymentTracking(
            razorpay_order_id=order_id,
            name=self.customer.name,
            email=self.customer.email,
            phone=self.customer.phone,
            package_id=self.plan.plan_id,
            package_name=self.plan.title,
            amount=self.amount,
            coupon_code=self.quote.coupon_code,
            payment_method=method,
            status="pending",
        )

    def start_gateway(self, db: Session) -> GatewayOrder:
        """
        Create the Razorpay order for the quoted amount and record it.
        The state only moves once the order exists.
        """
        self._require(CheckoutState.DETAILS_ENTERED, "start gateway checkout")
        order = razorpay_service.create_order(
            amount_inr=self.amount,
            notes={
                "planId": self.plan.plan_id,
                "planName": self.plan.title,
                "couponCode": self.quote.coupon_code,
                "customerEmail": self.customer.email,
            },
        )

        db.add(RazorpayOrder(
            razorpay_order_id=order["id"],
            package_id=self.plan.plan_id,
            package_name=self.plan.title,
            base_amount=self.quote.base_price,
            amount=self.amount,
            coupon_code=self.quote.coupon_code,
            customer_name=self.customer.name,
            customer_email=self.customer.email,
            customer_phone=self.customer.phone,
            status="created",
        ))
        db.add(self._tracking_row("razorpay", order_id=order["id"]))
        db.commit()

        self._move(CheckoutState.GATEWAY_CHECKOUT, "start gateway checkout")
        logger.info(
            f"Razorpay order {order['id']} created: plan={self.plan.plan_id} "
            f"amount={self.amount} coupon={self.quote.coupon_code}"
        )
        return GatewayOrder(
            order_id=order["id"],
            amount=order.get("amount", self.amount * 100),
            currency=order.get("currency", "INR"),
            key_id=settings.razorpay_key_id,
        )

    def start_manual_qr(self, db: Session, vpa: str, payee_name: str = "") -> ManualPayment:
        self._require(CheckoutState.DETAILS_ENTERED, "start UPI payment")
        uri = upi_service.build_upi_uri(
            vpa=vpa,
            amount=self.amount,
            payee_name=payee_name,
            note=f"Payment for {self.plan.title}",
        )
        qr_url = upi_service.render_qr_data_uri(uri)

        row = self._tracking_row("upi")
        db.add(row)
        db.commit()
        db.refresh(row)

        self._move(CheckoutState.MANUAL_QR, "start UPI payment")
        logger.info(f"UPI QR issued: payment={row.id} plan={self.plan.plan_id} amount={self.amount}")
        return ManualPayment(payment_id=row.id, upi_uri=uri, qr_url=qr_url, amount=self.amount)

    # ── Resolution (in-process callers) ───────────────────────────────────────

    def cancel(self) -> None:
        self._move(CheckoutState.IDLE, "cancel")
        self.quote = PriceQuote(base_price=self.plan.price, final_price=self.plan.price)

    def resolve(self, outcome: CheckoutOutcome) -> None:
        self._move(CheckoutState.RESOLVED, "resolve")
        self.outcome = outcome


# ── Cross-request gateway completion ──────────────────────────────────────────

def _get_order(db: Session, razorpay_order_id: str) -> RazorpayOrder:
    order = (
        db.query(RazorpayOrder)
        .filter(RazorpayOrder.razorpay_order_id == razorpay_order_id)
        .first()
    )
    if not order:
        logger.error(f"Unknown Razorpay order {razorpay_order_id}")
        raise NotFoundException("Order")
    return order


def _tracking_for(db: Session, razorpay_order_id: str) -> Optional[PaymentTracking]:
    return (
        db.query(PaymentTracking)
        .filter(PaymentTracking.razorpay_order_id == razorpay_order_id)
        .first()
    )


def verify_gateway_payment(
    db: Session,
    razorpay_order_id: str,
    razorpay_payment_id: str,
    razorpay_signature: str,
) -> RazorpayOrder:
    """
    Settle a gateway checkout from the widget callback.

    Valid signature   → tracking "success", order "paid"
    Invalid signature → tracking "failed", order "failed_invalid_signature", raises
    """
    order = _get_order(db, razorpay_order_id)
    tracking = _tracking_for(db, razorpay_order_id)

    valid = razorpay_service.verify_payment_signature(
        razorpay_order_id=razorpay_order_id,
        razorpay_payment_id=razorpay_payment_id,
        razorpay_signature=razorpay_signature,
    )

    # A settled order is never downgraded by a later bad callback
    if order.status == "paid":
        if not valid:
            raise InvalidSignatureException()
        return order

    if not valid:
        order.status = "failed_invalid_signature"
        if tracking:
            tracking.status = "failed"
        db.commit()
        logger.error(
            f"Invalid signature for order {razorpay_order_id} payment {razorpay_payment_id}"
        )
        raise InvalidSignatureException()

    order.status = "paid"
    if tracking:
        tracking.status = "success"
    db.commit()
    db.refresh(order)
    logger.info(
        f"Payment verified: order={razorpay_order_id} payment={razorpay_payment_id} "
        f"amount={order.amount} customer={order.customer_email}"
    )
    return order


def cancel_gateway_checkout(db: Session, razorpay_order_id: str) -> RazorpayOrder:
    """The customer closed the widget. Payment tracking keeps its status."""
    order = _get_order(db, razorpay_order_id)
    if order.status == "created":
        order.status = "cancelled"
        db.commit()
        db.refresh(order)
    logger.info(f"Payment cancelled: order={razorpay_order_id}")
    return order
