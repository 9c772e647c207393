"""
Centralised custom exceptions.
Every subclass is an HTTPException, so the global handler in main.py turns
each one into the standard {"success": false, "message": ...} body.
"""
from fastapi import HTTPException, status


class CredentialsException(HTTPException):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class NotFoundException(HTTPException):
    def __init__(self, resource: str = "Resource"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )


class InvalidCouponException(HTTPException):
    def __init__(self, detail: str = "Invalid coupon"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ExpiredCouponException(HTTPException):
    def __init__(self):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="Coupon expired")


class CouponLookupException(HTTPException):
    """The coupon could not be checked. The user must retry or clear the code."""

    def __init__(self):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not verify coupon. Please try again or remove the code.",
        )


class ContentUnavailableException(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Content service unavailable. Please try again later.",
        )


class PaymentGatewayException(HTTPException):
    def __init__(self, detail: str = "Error creating payment order"):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class InvalidSignatureException(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid payment signature",
        )


class CheckoutStateException(HTTPException):
    def __init__(self, action: str, state: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot {action} from state {state}",
        )
