"""Promo code domain exceptions."""

from .base import DomainException


class InvalidPromoCodeRequestException(DomainException):
    """Raised when a promo code validation request is missing fields."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_PROMO_CODE_REQUEST",
        )


class PromoCodeRejectedException(DomainException):
    """Raised when the backend refuses to validate a promo code at checkout."""

    def __init__(self, message: str = "Failed to validate promo code"):
        super().__init__(
            message=message,
            code="PROMO_CODE_REJECTED",
        )
