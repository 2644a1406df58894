"""
Pydantic schemas for trip-related request/response validation.
Date ordering is checked in the service so the error reads the same for
create and update.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import Field, field_validator

from app.schemas.common import CamelModel, RecordId, blank_to_none


class TripCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    destination: str = Field(..., min_length=1, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def empty_dates_to_none(cls, value):
        return blank_to_none(value)


class TripUpdate(TripCreate):
    id: RecordId


class TripResponse(CamelModel):
    id: int
    name: str
    destination: str
    start_date: Optional[date]
    end_date: Optional[date]
    created_at: datetime
