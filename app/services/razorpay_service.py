"""
Razorpay payment service.

Flow:
  1. Frontend calls POST /api/checkout/create-order → backend creates Razorpay order
  2. Backend returns {order_id, amount, currency, key_id} to frontend
  3. Frontend opens Razorpay JS checkout widget and the user pays
  4. Razorpay returns {payment_id, order_id, signature} to the widget callback
  5. Frontend POSTs all three to POST /api/payment/verify
  6. Backend verifies HMAC-SHA256 signature and marks the payment successful

The widget callback is the only success signal: no polling, no webhooks.
The signature is an HMAC of "{order_id}|{payment_id}" using the Razorpay secret.
"""
import hmac
import hashlib
import logging
import time

import razorpay
import requests
from razorpay.errors import BadRequestError, GatewayError, ServerError

from app.config import settings
from app.core.exceptions import PaymentGatewayException

logger = logging.getLogger(__name__)

# Initialize Razorpay client once at module level
client = razorpay.Client(
    auth=(settings.razorpay_key_id, settings.razorpay_key_secret)
)


def create_order(amount_inr: int, notes: dict) -> dict:
    """
    Create a Razorpay order.

    Args:
        amount_inr: final amount in whole rupees (after any coupon)
        notes: shown on the Razorpay dashboard (plan id, coupon code, customer)

    Returns:
        Razorpay order dict containing 'id', 'amount', 'currency', etc.

    Note: Razorpay amounts are in PAISE (1 rupee = 100 paise).
    """
    data = {
        "amount": amount_inr * 100,
        "currency": "INR",
        "receipt": f"receipt_{int(time.time() * 1000)}",
        "payment_capture": 1,   # auto-capture payment on success
        "notes": {k: v for k, v in notes.items() if v is not None},
    }
    try:
        return client.order.create(data=data)
    except (BadRequestError, GatewayError, ServerError, requests.RequestException) as exc:
        logger.error(f"Razorpay order creation failed: {exc}")
        raise PaymentGatewayException()


def verify_payment_signature(
    razorpay_order_id: str,
    razorpay_payment_id: str,
    razorpay_signature: str,
) -> bool:
    """
    Verify Razorpay payment signature using HMAC-SHA256.

    Returns True if valid, False if tampered or invalid.
    Uses hmac.compare_digest for timing-safe comparison.
    """
    message = f"{razorpay_order_id}|{razorpay_payment_id}"
    expected_signature = hmac.new(
        settings.razorpay_key_secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()

    return hmac.compare_digest(expected_signature, razorpay_signature)
