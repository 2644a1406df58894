"""
Booking endpoints.

Writes are all-or-nothing: the booking row and its traveller set are
committed together or rolled back together.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.common import MAX_ID, DeleteResponse
from app.schemas.booking import BookingCreate, BookingUpdate, BookingResponse
from app.services.booking_service import (
    list_bookings,
    create_booking,
    update_booking,
    delete_booking,
)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("", response_model=list[BookingResponse])
async def list_bookings_endpoint(
    booking_id: Optional[int] = Query(None, alias="bookingId", ge=1, le=MAX_ID),
    trip_id: Optional[int] = Query(None, alias="tripId", ge=1, le=MAX_ID),
    organizer_id: Optional[int] = Query(None, alias="organizerId", ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
):
    """
    List bookings with trip and organizer details.
    Filters combine with AND. Filtering by bookingId also returns the
    booking's users.
    """
    return await list_bookings(db, booking_id=booking_id, trip_id=trip_id, organizer_id=organizer_id)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking_endpoint(booking_data: BookingCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a booking and attach its users.
    404 if the trip, organizer, or any user does not exist; nothing is saved.
    """
    return await create_booking(db, booking_data)


@router.put("", response_model=BookingResponse)
async def update_booking_endpoint(booking_data: BookingUpdate, db: AsyncSession = Depends(get_db)):
    """Update a booking. `userIds` replaces the full set of attached users."""
    return await update_booking(db, booking_data)


@router.delete("", response_model=DeleteResponse)
async def delete_booking_endpoint(
    booking_id: Optional[int] = Query(None, alias="id", ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
):
    if booking_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Booking ID is required")
    await delete_booking(db, booking_id)
    return DeleteResponse(message="Booking deleted successfully", id=booking_id)
