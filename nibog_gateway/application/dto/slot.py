"""Data transfer objects for slot status operations."""

from dataclasses import dataclass

from nibog_gateway.domain.entities import SlotStatus


@dataclass(frozen=True)
class SlotStatusResponse:
    slot_id: str
    status: SlotStatus
