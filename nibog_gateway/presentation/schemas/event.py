"""Event catalog Pydantic schemas."""

from typing import Any, Optional

from pydantic import BaseModel


class CitySchema(BaseModel):
    city_id: Optional[Any] = None
    city_name: Optional[str] = None
    state: Optional[str] = None
    is_active: Optional[bool] = None


class VenueSchema(BaseModel):
    venue_id: Optional[Any] = None
    venue_name: Optional[str] = None
    address: Optional[str] = None
    capacity: Optional[int] = None
    is_active: Optional[bool] = None


class GameSlotSchema(BaseModel):
    slot_id: Optional[Any] = None
    game_id: Optional[Any] = None
    custom_title: Optional[str] = None
    custom_description: Optional[str] = None
    custom_price: Optional[Any] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    slot_price: Optional[Any] = None
    max_participants: Optional[int] = None
    status: str = "active"


class EventWithGamesSchema(BaseModel):
    """One event joined with its city, venue and game slots."""

    event_id: Optional[Any] = None
    event_title: Optional[str] = None
    event_description: Optional[str] = None
    event_date: Optional[str] = None
    event_status: Optional[str] = None
    city: CitySchema
    venue: VenueSchema
    games: list[GameSlotSchema]
