"""Event game slot status endpoints."""

from typing import Annotated, Dict

from fastapi import APIRouter, Depends, Query

from nibog_gateway.application.services import SlotStatusService
from nibog_gateway.core.dependencies import get_slot_status_service
from nibog_gateway.presentation.schemas import (
    ErrorResponseSchema,
    SlotStatusChangeSchema,
    SlotStatusSchema,
    SlotStatusUpdateSchema,
)

slots_router = APIRouter(
    prefix="/event-game-slots",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid slot or status"},
    },
)


@slots_router.get(
    "/status",
    response_model=SlotStatusSchema | Dict[str, str],
    summary="Get Slot Status",
    description="""
    Get the status of one slot, or every non-default status when slot_id
    is omitted. Slots without an override are active.
    """,
)
async def get_slot_status(
    slot_service: Annotated[SlotStatusService, Depends(get_slot_status_service)],
    slot_id: Annotated[str | None, Query(description="Slot to look up")] = None,
) -> SlotStatusSchema | Dict[str, str]:
    if slot_id is None:
        return {key: status.value for key, status in slot_service.list_statuses().items()}

    response = slot_service.get_status(slot_id)
    return SlotStatusSchema(slot_id=response.slot_id, status=response.status.value)


@slots_router.post(
    "/status",
    response_model=SlotStatusChangeSchema,
    summary="Set Slot Status",
)
async def set_slot_status(
    request: SlotStatusUpdateSchema,
    slot_service: Annotated[SlotStatusService, Depends(get_slot_status_service)],
) -> SlotStatusChangeSchema:
    response = slot_service.set_status(request.slot_id, request.status)
    return SlotStatusChangeSchema(
        slot_id=response.slot_id,
        status=response.status.value,
        message=f"Slot status updated to {response.status.value}",
    )


@slots_router.delete(
    "/status",
    response_model=SlotStatusChangeSchema,
    summary="Reset Slot Status",
)
async def reset_slot_status(
    slot_service: Annotated[SlotStatusService, Depends(get_slot_status_service)],
    slot_id: Annotated[str | None, Query(description="Slot to reset")] = None,
) -> SlotStatusChangeSchema:
    response = slot_service.reset_status(slot_id)
    return SlotStatusChangeSchema(
        slot_id=response.slot_id,
        status=response.status.value,
        message="Slot status reset to active",
    )
