"""
Organizer service handling CRUD operations.
"""

from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from app.models.organizer import Organizer
from app.models.booking import Booking
from app.schemas.organizer import OrganizerCreate, OrganizerUpdate
from app.db.session import transaction
from app.core.metrics import record_write
from app.core.logging import get_logger

logger = get_logger(__name__)


def _email_conflict() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Email already exists",
    )


async def _ensure_email_free(db: AsyncSession, email: str, exclude_id: Optional[int] = None) -> None:
    query = select(Organizer.id).where(func.lower(Organizer.email) == email.lower())
    if exclude_id is not None:
        query = query.where(Organizer.id != exclude_id)
    if (await db.execute(query)).first():
        logger.warning("organizer_email_conflict", email=email)
        raise _email_conflict()


async def list_organizers(db: AsyncSession) -> list[Organizer]:
    result = await db.execute(
        select(Organizer).order_by(Organizer.created_at.desc(), Organizer.id.desc())
    )
    return list(result.scalars().all())


async def create_organizer(db: AsyncSession, organizer_data: OrganizerCreate) -> Organizer:
    try:
        async with transaction(db, "organizer"):
            await _ensure_email_free(db, organizer_data.email)
            organizer = Organizer(
                name=organizer_data.name,
                email=organizer_data.email,
                phone=organizer_data.phone,
            )
            db.add(organizer)
            await db.flush()
            await db.refresh(organizer)
    except IntegrityError:
        raise _email_conflict()

    record_write("organizer", "create")
    logger.info("organizer_created", organizer_id=organizer.id, email=organizer.email)
    return organizer


async def update_organizer(db: AsyncSession, organizer_data: OrganizerUpdate) -> Organizer:
    try:
        async with transaction(db, "organizer"):
            organizer = await db.get(Organizer, organizer_data.id)
            if not organizer:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Organizer not found",
                )
            await _ensure_email_free(db, organizer_data.email, exclude_id=organizer.id)

            organizer.name = organizer_data.name
            organizer.email = organizer_data.email
            organizer.phone = organizer_data.phone
            await db.flush()
            await db.refresh(organizer)
    except IntegrityError:
        raise _email_conflict()

    record_write("organizer", "update")
    logger.info("organizer_updated", organizer_id=organizer.id)
    return organizer


async def delete_organizer(db: AsyncSession, organizer_id: int) -> None:
    async with transaction(db, "organizer"):
        organizer = await db.get(Organizer, organizer_id)
        if not organizer:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Organizer not found",
            )

        bookings = await db.scalar(
            select(func.count()).select_from(Booking).where(Booking.organizer_id == organizer_id)
        )
        if bookings:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Organizer is referenced by existing bookings",
            )

        await db.delete(organizer)

    record_write("organizer", "delete")
    logger.info("organizer_deleted", organizer_id=organizer_id)
