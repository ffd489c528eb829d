"""Slot status Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class SlotStatusUpdateSchema(BaseModel):
    """
    Schema for POST /v1/event-game-slots/status request body.

    Both fields are optional here so that missing values are reported
    as INVALID_SLOT_STATUS (400) by the service, not as a 422.
    """

    slot_id: Optional[str] = Field(
        None,
        description="Event game slot identifier",
        examples=["12"],
    )
    status: Optional[str] = Field(
        None,
        description="active, paused, cancelled, completed or full",
        examples=["paused"],
    )

    @field_validator("slot_id", mode="before")
    @classmethod
    def coerce_slot_id(cls, v):
        """Slot IDs arrive as numbers from the admin UI."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class SlotStatusSchema(BaseModel):
    slot_id: str
    status: str


class SlotStatusChangeSchema(SlotStatusSchema):
    success: bool = True
    message: str
