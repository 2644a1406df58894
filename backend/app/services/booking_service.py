"""
Booking service: transactional writes of a booking and its travellers.

WRITE STRATEGY: Header Upsert + Join-Table Replace
==================================================

A booking is a header row (trip, organizer, type, provider, dates) plus a set
of rows in booking_users. Both must change together or not at all.

  1. Validate the payload (schema: required fields, type enum; here: dates)
  2. Inside one transaction:
     - verify the trip and the organizer exist
     - on update, verify the booking exists
     - insert or update the header row
     - on update, DELETE every booking_users row for the booking
     - for each requested user: verify it exists, INSERT the join row
  3. Commit

Any error inside step 2 rolls the whole transaction back (see
app.db.session.transaction), so a missing user discovered halfway through
the list leaves the previous header and traveller set untouched.

The join table is replaced, never diffed: submitting the same user list
twice produces the same final set.

Concurrent updates to one booking are not serialized here; the database
isolation level decides and the last commit wins.
"""

from typing import Iterable, Optional

from sqlalchemy import select, delete, insert
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from app.models.booking import Booking, booking_users
from app.models.organizer import Organizer
from app.models.trip import Trip
from app.models.user import User
from app.schemas.booking import BookingCreate, BookingUpdate, BookingResponse, BookingUser
from app.services.trip_service import validate_date_range
from app.db.session import transaction
from app.core.metrics import record_write
from app.core.logging import get_logger

logger = get_logger(__name__)


def _not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


async def _ensure_trip_and_organizer(db: AsyncSession, trip_id: int, organizer_id: int) -> None:
    if (await db.execute(select(Trip.id).where(Trip.id == trip_id))).first() is None:
        raise _not_found("Trip not found")
    if (await db.execute(select(Organizer.id).where(Organizer.id == organizer_id))).first() is None:
        raise _not_found("Organizer not found")


async def _attach_users(db: AsyncSession, booking_id: int, user_ids: Iterable[int]) -> None:
    """Insert join rows, aborting on the first user that does not exist."""
    # Repeated ids collapse to one row; order of first appearance is kept
    for user_id in dict.fromkeys(user_ids):
        if (await db.execute(select(User.id).where(User.id == user_id))).first() is None:
            logger.warning("booking_user_missing", booking_id=booking_id, user_id=user_id)
            raise _not_found(f"User with ID {user_id} not found")
        await db.execute(insert(booking_users).values(booking_id=booking_id, user_id=user_id))


def _joined_bookings_query():
    return (
        select(
            Booking.id,
            Booking.trip_id,
            Booking.organizer_id,
            Booking.type,
            Booking.provider_name,
            Booking.booking_ref,
            Booking.start_date,
            Booking.end_date,
            Trip.name.label("trip_name"),
            Trip.destination.label("trip_destination"),
            Organizer.name.label("organizer_name"),
            Organizer.email.label("organizer_email"),
            Organizer.phone.label("organizer_phone"),
        )
        .select_from(Booking)
        .join(Trip, Booking.trip_id == Trip.id)
        .join(Organizer, Booking.organizer_id == Organizer.id)
    )


async def get_booking_users(db: AsyncSession, booking_id: int) -> list[BookingUser]:
    result = await db.execute(
        select(User.id, User.name, User.email)
        .join(booking_users, booking_users.c.user_id == User.id)
        .where(booking_users.c.booking_id == booking_id)
        .order_by(User.name.asc(), User.id.asc())
    )
    return [BookingUser.model_validate(dict(row)) for row in result.mappings()]


async def list_bookings(
    db: AsyncSession,
    booking_id: Optional[int] = None,
    trip_id: Optional[int] = None,
    organizer_id: Optional[int] = None,
) -> list[BookingResponse]:
    """
    List bookings joined with trip and organizer details.
    Newest start date first; bookings without a start date sort last.
    When filtered to one booking, its travellers are attached as `users`.
    """
    query = _joined_bookings_query()

    if booking_id is not None:
        query = query.where(Booking.id == booking_id)
    if trip_id is not None:
        query = query.where(Booking.trip_id == trip_id)
    if organizer_id is not None:
        query = query.where(Booking.organizer_id == organizer_id)

    query = query.order_by(Booking.start_date.desc().nulls_last(), Booking.id.desc())
    result = await db.execute(query)
    bookings = [BookingResponse.model_validate(dict(row)) for row in result.mappings()]

    if booking_id is not None and bookings:
        bookings[0].users = await get_booking_users(db, booking_id)

    return bookings


async def get_booking(db: AsyncSession, booking_id: int) -> BookingResponse:
    bookings = await list_bookings(db, booking_id=booking_id)
    if not bookings:
        raise _not_found("Booking not found")
    return bookings[0]


async def create_booking(db: AsyncSession, booking_data: BookingCreate) -> BookingResponse:
    validate_date_range(booking_data.start_date, booking_data.end_date)

    async with transaction(db, "booking"):
        await _ensure_trip_and_organizer(db, booking_data.trip_id, booking_data.organizer_id)

        booking = Booking(
            trip_id=booking_data.trip_id,
            organizer_id=booking_data.organizer_id,
            type=booking_data.type,
            provider_name=booking_data.provider_name,
            booking_ref=booking_data.booking_ref,
            start_date=booking_data.start_date,
            end_date=booking_data.end_date,
        )
        db.add(booking)
        await db.flush()
        booking_id = booking.id

        await _attach_users(db, booking_id, booking_data.user_ids)

    record_write("booking", "create")
    logger.info(
        "booking_created",
        booking_id=booking_id,
        trip_id=booking_data.trip_id,
        organizer_id=booking_data.organizer_id,
        users=len(booking_data.user_ids),
    )
    return await get_booking(db, booking_id)


async def update_booking(db: AsyncSession, booking_data: BookingUpdate) -> BookingResponse:
    """
    Replace a booking's fields and its full set of travellers.
    An empty `user_ids` list detaches every traveller.
    """
    validate_date_range(booking_data.start_date, booking_data.end_date)

    async with transaction(db, "booking"):
        await _ensure_trip_and_organizer(db, booking_data.trip_id, booking_data.organizer_id)

        booking = await db.get(Booking, booking_data.id)
        if not booking:
            raise _not_found("Booking not found")

        booking.trip_id = booking_data.trip_id
        booking.organizer_id = booking_data.organizer_id
        booking.type = booking_data.type
        booking.provider_name = booking_data.provider_name
        booking.booking_ref = booking_data.booking_ref
        booking.start_date = booking_data.start_date
        booking.end_date = booking_data.end_date
        await db.flush()

        await db.execute(delete(booking_users).where(booking_users.c.booking_id == booking_data.id))
        await _attach_users(db, booking_data.id, booking_data.user_ids)

    record_write("booking", "update")
    logger.info("booking_updated", booking_id=booking_data.id, users=len(booking_data.user_ids))
    return await get_booking(db, booking_data.id)


async def delete_booking(db: AsyncSession, booking_id: int) -> None:
    """Remove the booking's travellers, then the booking itself."""
    async with transaction(db, "booking"):
        await db.execute(delete(booking_users).where(booking_users.c.booking_id == booking_id))
        result = await db.execute(delete(Booking).where(Booking.id == booking_id))
        if result.rowcount == 0:
            raise _not_found("Booking not found")

    record_write("booking", "delete")
    logger.info("booking_deleted", booking_id=booking_id)
