"""Slot status domain exceptions."""

from .base import DomainException


class InvalidSlotStatusException(DomainException):
    """Raised when a slot status update is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_SLOT_STATUS",
        )
