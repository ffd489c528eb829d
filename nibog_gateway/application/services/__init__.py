"""Application services (use cases)."""

from .payment_record_service import PaymentRecordService
from .payment_service import PaymentService
from .promo_service import PromoCodeService
from .slot_service import SlotStatusService
from .event_service import EventCatalogService

__all__ = [
    "PaymentRecordService",
    "PaymentService",
    "PromoCodeService",
    "SlotStatusService",
    "EventCatalogService",
]
