"""Event game slot status."""

from enum import Enum


class SlotStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    FULL = "full"

    @classmethod
    def default(cls) -> "SlotStatus":
        return cls.ACTIVE
