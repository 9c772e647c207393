"""
Coupon/discount resolution.

Given a plan's base price and an optional user-entered code, produce the
final charge:

    percentage:  final = floor(price * (1 - amount/100))
    flat:        final = max(0, price - amount)

The code is trimmed and uppercased before lookup. Every failure path
raises: an unknown, expired, or unverifiable code never falls back to the
full price or to a discount without the user being told.
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from fractions import Fraction
from typing import Optional

from app.core.exceptions import (
    InvalidCouponException,
    ExpiredCouponException,
    CouponLookupException,
)
from app.schemas.content import Coupon
from app.services.cms_service import SanityClient, CMSError
from app.services.content_service import find_coupon

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceQuote:
    base_price: int
    final_price: int
    coupon_code: Optional[str] = None

    @property
    def discount(self) -> int:
        return self.base_price - self.final_price


def normalize_code(code: Optional[str]) -> Optional[str]:
    if code is None:
        return None
    code = code.strip().upper()
    return code or None


def apply_discount(price: int, coupon: Coupon) -> int:
    """
    Discounted price in whole rupees.
    Fraction keeps the arithmetic exact: 15000 at 10% is 13500, not 13499.
    """
    amount = Fraction(str(coupon.discount_amount))
    if amount < 0:
        raise InvalidCouponException()

    if coupon.discount_type == "percentage":
        final = math.floor(price * (1 - amount / 100))
    elif coupon.discount_type == "flat":
        final = math.floor(price - amount)
    else:
        raise InvalidCouponException()
    return max(0, final)


def is_expired(coupon: Coupon, now: Optional[datetime] = None) -> bool:
    if coupon.expiry_date is None:
        return False
    now = now or datetime.now(timezone.utc)
    expiry = coupon.expiry_date
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    return expiry < now


def resolve_price(
    cms: SanityClient,
    price: int,
    code: Optional[str],
    now: Optional[datetime] = None,
) -> PriceQuote:
    """
    Look the code up and return the quote, or raise.

    Raises:
        CouponLookupException: CMS unreachable or the coupon document is malformed
        InvalidCouponException: no active coupon with this code, or unusable terms
        ExpiredCouponException: coupon past its expiry date
    """
    normalized = normalize_code(code)
    if normalized is None:
        return PriceQuote(base_price=price, final_price=price)

    try:
        coupon = find_coupon(cms, normalized)
    except CMSError as exc:
        logger.error(f"Coupon lookup failed for {normalized}: {exc}")
        raise CouponLookupException()

    if coupon is None:
        logger.info(f"Rejected unknown coupon {normalized}")
        raise InvalidCouponException()
    if is_expired(coupon, now):
        logger.info(f"Rejected expired coupon {normalized}")
        raise ExpiredCouponException()

    final = apply_discount(price, coupon)
    return PriceQuote(base_price=price, final_price=final, coupon_code=normalized)
