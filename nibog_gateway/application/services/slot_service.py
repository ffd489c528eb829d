"""Slot status service - tracks temporary event game slot states."""

import structlog

from nibog_gateway.application.dto import SlotStatusResponse
from nibog_gateway.domain.entities import SlotStatus
from nibog_gateway.domain.exceptions import InvalidSlotStatusException
from nibog_gateway.domain.interfaces import KeyValueStore

logger = structlog.get_logger(__name__)


class SlotStatusService:
    """
    Overrides for event game slot status.

    Only non-default statuses are stored; a missing entry means active.
    """

    def __init__(self, store: KeyValueStore, ttl_seconds: float | None = None):
        self._store = store
        self._ttl = ttl_seconds

    def get_status(self, slot_id: str) -> SlotStatusResponse:
        slot_id = self._require_slot_id(slot_id)
        status = self._store.get(slot_id) or SlotStatus.default()
        return SlotStatusResponse(slot_id=slot_id, status=SlotStatus(status))

    def list_statuses(self) -> dict[str, SlotStatus]:
        return {key: SlotStatus(value) for key, value in self._store.items().items()}

    def set_status(self, slot_id: str, status: str) -> SlotStatusResponse:
        """
        Set a slot status; setting "active" clears the override.

        Raises:
            InvalidSlotStatusException: Missing slot id or unknown status
        """
        slot_id = self._require_slot_id(slot_id)
        try:
            new_status = SlotStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in SlotStatus)
            raise InvalidSlotStatusException(f"Valid status is required ({allowed})")

        if new_status == SlotStatus.default():
            self._store.delete(slot_id)
        else:
            self._store.set(slot_id, new_status.value, ttl_seconds=self._ttl)

        logger.info("slot_status_updated", slot_id=slot_id, status=new_status.value)
        return SlotStatusResponse(slot_id=slot_id, status=new_status)

    def reset_status(self, slot_id: str) -> SlotStatusResponse:
        slot_id = self._require_slot_id(slot_id)
        self._store.delete(slot_id)
        logger.info("slot_status_reset", slot_id=slot_id)
        return SlotStatusResponse(slot_id=slot_id, status=SlotStatus.default())

    @staticmethod
    def _require_slot_id(slot_id: str | None) -> str:
        if slot_id is None or not str(slot_id).strip():
            raise InvalidSlotStatusException("Slot ID is required")
        return str(slot_id).strip()
