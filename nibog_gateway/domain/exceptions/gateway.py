"""Exceptions for upstream services (PhonePe, webhook backend)."""

from .base import DomainException


class PaymentGatewayException(DomainException):
    """Raised when the PhonePe API is unreachable or returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="PAYMENT_GATEWAY_ERROR",
        )
        self.status_code = status_code


class PaymentGatewayTimeoutException(PaymentGatewayException):
    """Raised when the PhonePe API times out."""

    def __init__(self):
        super().__init__(
            message="Payment gateway request timed out",
            status_code=None,
        )
        self.code = "PAYMENT_GATEWAY_TIMEOUT"


class BackendUnavailableException(DomainException):
    """Raised when the webhook backend fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="BACKEND_UNAVAILABLE",
        )
        self.status_code = status_code
