"""Domain Entities - Core business objects."""

from .payment import (
    MerchantCredentials,
    PaymentInstrument,
    PaymentRequest,
    PaymentStatus,
    SignedEnvelope,
)
from .slot import SlotStatus

__all__ = [
    "MerchantCredentials",
    "PaymentInstrument",
    "PaymentRequest",
    "PaymentStatus",
    "SignedEnvelope",
    "SlotStatus",
]
