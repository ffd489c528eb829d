"""Data Transfer Objects for application layer."""

from .payment import (
    PaymentInitiationRequest,
    PaymentInitiationResponse,
    PaymentRecordResult,
    PaymentStatusResponse,
)
from .slot import SlotStatusResponse

__all__ = [
    "PaymentInitiationRequest",
    "PaymentInitiationResponse",
    "PaymentRecordResult",
    "PaymentStatusResponse",
    "SlotStatusResponse",
]
