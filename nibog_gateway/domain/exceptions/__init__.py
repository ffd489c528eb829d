"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .payment import (
    InvalidPaymentRequestException,
    MissingMerchantCredentialsException,
    SignatureMismatchException,
    PaymentRejectedException,
)
from .gateway import (
    PaymentGatewayException,
    PaymentGatewayTimeoutException,
    BackendUnavailableException,
)
from .slot import InvalidSlotStatusException
from .promo import InvalidPromoCodeRequestException, PromoCodeRejectedException

__all__ = [
    "DomainException",
    "InvalidPaymentRequestException",
    "MissingMerchantCredentialsException",
    "SignatureMismatchException",
    "PaymentRejectedException",
    "PaymentGatewayException",
    "PaymentGatewayTimeoutException",
    "BackendUnavailableException",
    "InvalidSlotStatusException",
    "InvalidPromoCodeRequestException",
    "PromoCodeRejectedException",
]
