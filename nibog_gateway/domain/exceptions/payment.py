"""Payment-related domain exceptions."""

from typing import List

from .base import DomainException


class InvalidPaymentRequestException(DomainException):
    """Raised when payment input has the wrong shape."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_PAYMENT_REQUEST",
        )


class MissingMerchantCredentialsException(DomainException):
    """Raised when PhonePe merchant credentials are not configured."""

    def __init__(self, missing: List[str]):
        super().__init__(
            message=f"Merchant credentials missing: {', '.join(missing)}",
            code="MERCHANT_CREDENTIALS_MISSING",
        )
        self.missing = missing


class SignatureMismatchException(DomainException):
    """Raised when a callback X-VERIFY signature does not match."""

    def __init__(self, message: str = "Callback signature verification failed"):
        super().__init__(
            message=message,
            code="SIGNATURE_MISMATCH",
        )


class PaymentRejectedException(DomainException):
    """Raised when the gateway answers but refuses the request."""

    def __init__(self, message: str, gateway_code: str | None = None):
        super().__init__(
            message=message,
            code="PAYMENT_REJECTED",
        )
        self.gateway_code = gateway_code
