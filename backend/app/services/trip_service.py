"""
Trip service handling CRUD operations.
"""

from datetime import date
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from app.models.trip import Trip
from app.models.booking import Booking
from app.schemas.trip import TripCreate, TripUpdate
from app.db.session import transaction
from app.core.metrics import record_write
from app.core.logging import get_logger

logger = get_logger(__name__)


def validate_date_range(start_date: Optional[date], end_date: Optional[date]) -> None:
    """Reject ranges that end before they start. Open-ended ranges are fine."""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Start date cannot be after end date",
        )


async def list_trips(db: AsyncSession) -> list[Trip]:
    result = await db.execute(select(Trip).order_by(Trip.created_at.desc(), Trip.id.desc()))
    return list(result.scalars().all())


async def create_trip(db: AsyncSession, trip_data: TripCreate) -> Trip:
    validate_date_range(trip_data.start_date, trip_data.end_date)

    async with transaction(db, "trip"):
        trip = Trip(
            name=trip_data.name,
            destination=trip_data.destination,
            start_date=trip_data.start_date,
            end_date=trip_data.end_date,
        )
        db.add(trip)
        await db.flush()
        await db.refresh(trip)

    record_write("trip", "create")
    logger.info("trip_created", trip_id=trip.id, destination=trip.destination)
    return trip


async def update_trip(db: AsyncSession, trip_data: TripUpdate) -> Trip:
    """Replace every mutable field of an existing trip."""
    validate_date_range(trip_data.start_date, trip_data.end_date)

    async with transaction(db, "trip"):
        trip = await db.get(Trip, trip_data.id)
        if not trip:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Trip not found",
            )

        trip.name = trip_data.name
        trip.destination = trip_data.destination
        trip.start_date = trip_data.start_date
        trip.end_date = trip_data.end_date
        await db.flush()
        await db.refresh(trip)

    record_write("trip", "update")
    logger.info("trip_updated", trip_id=trip.id)
    return trip


async def delete_trip(db: AsyncSession, trip_id: int) -> None:
    async with transaction(db, "trip"):
        trip = await db.get(Trip, trip_id)
        if not trip:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Trip not found",
            )

        bookings = await db.scalar(
            select(func.count()).select_from(Booking).where(Booking.trip_id == trip_id)
        )
        if bookings:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Trip is referenced by existing bookings",
            )

        await db.delete(trip)

    record_write("trip", "delete")
    logger.info("trip_deleted", trip_id=trip_id)
