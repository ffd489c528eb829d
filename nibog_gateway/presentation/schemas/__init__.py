"""Pydantic schemas for API request/response validation."""

from .payment import (
    PaymentCallbackSchema,
    PaymentInitiateRequestSchema,
    PaymentInitiateResponseSchema,
    PaymentRecordCreateSchema,
    PaymentRecordSchema,
    PaymentStatusResponseSchema,
)
from .promo import (
    PromoCodeFinalRequestSchema,
    PromoCodePreviewRequestSchema,
    PromoCodeValidationSchema,
)
from .slot import SlotStatusChangeSchema, SlotStatusSchema, SlotStatusUpdateSchema
from .event import EventWithGamesSchema
from .error import ErrorResponseSchema

__all__ = [
    "PaymentCallbackSchema",
    "PaymentInitiateRequestSchema",
    "PaymentInitiateResponseSchema",
    "PaymentRecordCreateSchema",
    "PaymentRecordSchema",
    "PaymentStatusResponseSchema",
    "PromoCodeFinalRequestSchema",
    "PromoCodePreviewRequestSchema",
    "PromoCodeValidationSchema",
    "SlotStatusChangeSchema",
    "SlotStatusSchema",
    "SlotStatusUpdateSchema",
    "EventWithGamesSchema",
    "ErrorResponseSchema",
]
