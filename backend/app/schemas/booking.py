"""
Pydantic schemas for booking-related request/response validation.
"""

from datetime import date
from typing import Optional
from pydantic import Field, field_validator

from app.models.booking import BOOKING_TYPES
from app.schemas.common import CamelModel, RecordId, blank_to_none


class BookingCreate(CamelModel):
    trip_id: RecordId
    organizer_id: RecordId
    type: str
    provider_name: Optional[str] = Field(None, max_length=255)
    booking_ref: Optional[str] = Field(None, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    user_ids: list[RecordId] = Field(default_factory=list)

    @field_validator("type")
    @classmethod
    def type_must_be_known(cls, value: str) -> str:
        if value not in BOOKING_TYPES:
            raise ValueError(f"Type must be one of: {', '.join(BOOKING_TYPES)}")
        return value

    @field_validator("provider_name", "booking_ref", "start_date", "end_date", mode="before")
    @classmethod
    def empty_to_none(cls, value):
        return blank_to_none(value)

    @field_validator("user_ids", mode="before")
    @classmethod
    def null_user_ids(cls, value):
        return [] if value is None else value


class BookingUpdate(BookingCreate):
    id: RecordId


class BookingUser(CamelModel):
    id: int
    name: str
    email: str


class BookingResponse(CamelModel):
    """Booking row joined with its trip and organizer."""

    id: int
    trip_id: int
    organizer_id: int
    type: str
    provider_name: Optional[str]
    booking_ref: Optional[str]
    start_date: Optional[date]
    end_date: Optional[date]
    trip_name: str
    trip_destination: str
    organizer_name: str
    organizer_email: str
    organizer_phone: Optional[str]
    # Only populated when a single booking is requested
    users: Optional[list[BookingUser]] = None
