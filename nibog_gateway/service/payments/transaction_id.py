"""Merchant transaction ID generation."""

import time
from typing import Callable

from .constants import (
    MAX_TRANSACTION_ID_LENGTH,
    SHORT_BOOKING_ID_LENGTH,
    TRANSACTION_ID_PREFIX,
)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class TransactionIdGenerator:
    """
    Builds NIBOG_<booking_id>_<timestamp_ms> identifiers.

    Timestamps issued by one generator are strictly increasing, so two
    attempts for the same booking within one millisecond still differ.
    """

    def __init__(
        self,
        clock: Callable[[], int] = _now_ms,
        prefix: str = TRANSACTION_ID_PREFIX,
        max_length: int = MAX_TRANSACTION_ID_LENGTH,
    ):
        self._clock = clock
        self._prefix = prefix
        self._max_length = max_length
        self._last_timestamp = 0

    @property
    def prefix(self) -> str:
        return self._prefix

    def _next_timestamp(self) -> int:
        timestamp = max(self._clock(), self._last_timestamp + 1)
        self._last_timestamp = timestamp
        return timestamp

    def generate(self, booking_id: str) -> str:
        timestamp = self._next_timestamp()
        full_id = f"{self._prefix}{booking_id}_{timestamp}"
        if len(full_id) <= self._max_length:
            return full_id

        short_booking_id = str(booking_id)[-SHORT_BOOKING_ID_LENGTH:]
        return f"{self._prefix}{short_booking_id}_{timestamp}"
