"""Event catalog endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from nibog_gateway.application.services import EventCatalogService
from nibog_gateway.core.dependencies import get_event_catalog_service
from nibog_gateway.presentation.schemas import ErrorResponseSchema, EventWithGamesSchema

events_router = APIRouter(prefix="/events")


@events_router.get(
    "/with-games",
    response_model=list[EventWithGamesSchema],
    summary="List Events With Games",
    description="""
    Every event joined with its city, venue and game slots.

    Served from a short-lived cache; slot statuses are always current.
    """,
    responses={
        503: {"model": ErrorResponseSchema, "description": "Backend unavailable"},
    },
)
async def list_events_with_games(
    event_service: Annotated[EventCatalogService, Depends(get_event_catalog_service)],
) -> list[EventWithGamesSchema]:
    events = await event_service.list_events_with_games()
    return [EventWithGamesSchema.model_validate(event) for event in events]
