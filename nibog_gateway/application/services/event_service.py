"""Event catalog service - joins backend collections into one listing."""

import asyncio
from collections import defaultdict
from typing import Any, Dict, List

import structlog

from nibog_gateway.application.services.slot_service import SlotStatusService
from nibog_gateway.core.metrics import record_cache_lookup
from nibog_gateway.domain.interfaces import BookingBackendClient, KeyValueStore

logger = structlog.get_logger(__name__)

UNKNOWN_CITY = {"id": None, "city_name": "Unknown City", "state": "Unknown", "is_active": False}
UNKNOWN_VENUE = {
    "id": None,
    "venue_name": "Unknown Venue",
    "address": "Unknown",
    "capacity": 0,
    "is_active": False,
}


class EventCatalogService:
    """
    Read model of events with their cities, venues and game slots.

    The joined listing is cached; slot status overrides are applied on
    every read so they show up without waiting for the cache to expire.
    """

    CACHE_KEY = "events_with_games"

    def __init__(
        self,
        backend_client: BookingBackendClient,
        cache: KeyValueStore,
        slot_service: SlotStatusService,
        cache_ttl_seconds: float | None = None,
    ):
        self._backend = backend_client
        self._cache = cache
        self._slots = slot_service
        self._cache_ttl = cache_ttl_seconds

    async def list_events_with_games(self) -> List[Dict[str, Any]]:
        """
        Get every event with its city, venue and games.

        Raises:
            BackendUnavailableException: If any backend collection fails
        """
        events = self._cache.get(self.CACHE_KEY)
        record_cache_lookup(self.CACHE_KEY, hit=events is not None)

        if events is None:
            events = await self._load_events()
            self._cache.set(self.CACHE_KEY, events, ttl_seconds=self._cache_ttl)
            logger.info("event_catalog_refreshed", count=len(events))

        return self._apply_slot_statuses(events)

    def invalidate(self) -> None:
        self._cache.delete(self.CACHE_KEY)

    async def _load_events(self) -> List[Dict[str, Any]]:
        events, slots, cities, venues = await asyncio.gather(
            self._backend.get_collection("event/get-all"),
            self._backend.get_collection("event-game-slot/get-all"),
            self._backend.get_collection("city/get-all"),
            self._backend.get_collection("venues/get-all"),
        )

        city_map = {city.get("id"): city for city in cities}
        venue_map = {venue.get("id"): venue for venue in venues}
        slots_by_event: Dict[Any, List[Dict[str, Any]]] = defaultdict(list)
        for slot in slots:
            slots_by_event[slot.get("event_id")].append(slot)

        return [
            self._join_event(
                event,
                city_map.get(event.get("city_id"), UNKNOWN_CITY),
                venue_map.get(event.get("venue_id"), UNKNOWN_VENUE),
                slots_by_event.get(event.get("id"), []),
            )
            for event in events
        ]

    @staticmethod
    def _join_event(
        event: Dict[str, Any],
        city: Dict[str, Any],
        venue: Dict[str, Any],
        slots: List[Dict[str, Any]],
    ) -> Dict[str, Any]:
        return {
            "event_id": event.get("id"),
            "event_title": event.get("title"),
            "event_description": event.get("description"),
            "event_date": event.get("event_date"),
            "event_status": event.get("status"),
            "city": {
                "city_id": city.get("id"),
                "city_name": city.get("city_name"),
                "state": city.get("state"),
                "is_active": city.get("is_active"),
            },
            "venue": {
                "venue_id": venue.get("id"),
                "venue_name": venue.get("venue_name"),
                "address": venue.get("address"),
                "capacity": venue.get("capacity"),
                "is_active": venue.get("is_active"),
            },
            "games": [
                {
                    "slot_id": slot.get("id"),
                    "game_id": slot.get("game_id"),
                    "custom_title": slot.get("custom_title"),
                    "custom_description": slot.get("custom_description"),
                    "custom_price": slot.get("custom_price"),
                    "start_time": slot.get("start_time"),
                    "end_time": slot.get("end_time"),
                    "slot_price": slot.get("slot_price"),
                    "max_participants": slot.get("max_participants"),
                }
                for slot in slots
            ],
        }

    def _apply_slot_statuses(self, events: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        overrides = {
            slot_id: status.value for slot_id, status in self._slots.list_statuses().items()
        }
        return [
            {
                **event,
                "games": [
                    {
                        **game,
                        "status": overrides.get(str(game.get("slot_id")), "active"),
                    }
                    for game in event["games"]
                ],
            }
            for event in events
        ]
