"""
User service handling CRUD operations.
"""

from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from app.models.user import User
from app.models.booking import booking_users
from app.schemas.user import UserCreate, UserUpdate
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
    query = select(User.id).where(func.lower(User.email) == email.lower())
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    if (await db.execute(query)).first():
        logger.warning("user_email_conflict", email=email)
        raise _email_conflict()


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.name.asc(), User.id.asc()))
    return list(result.scalars().all())


async def create_user(db: AsyncSession, user_data: UserCreate) -> User:
    """
    Create a user.
    Raises 409 if the email is already registered.
    """
    try:
        async with transaction(db, "user"):
            await _ensure_email_free(db, user_data.email)
            user = User(name=user_data.name, email=user_data.email)
            db.add(user)
            await db.flush()
            await db.refresh(user)
    except IntegrityError:
        # Lost a race with a concurrent insert of the same email
        raise _email_conflict()

    record_write("user", "create")
    logger.info("user_created", user_id=user.id, email=user.email)
    return user


async def update_user(db: AsyncSession, user_data: UserUpdate) -> User:
    try:
        async with transaction(db, "user"):
            user = await db.get(User, user_data.id)
            if not user:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="User not found",
                )
            await _ensure_email_free(db, user_data.email, exclude_id=user.id)

            user.name = user_data.name
            user.email = user_data.email
            await db.flush()
            await db.refresh(user)
    except IntegrityError:
        raise _email_conflict()

    record_write("user", "update")
    logger.info("user_updated", user_id=user.id)
    return user


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """
    Delete a user.
    Users still attached to a booking are kept; the booking must be edited first.
    """
    async with transaction(db, "user"):
        user = await db.get(User, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        references = await db.scalar(
            select(func.count()).select_from(booking_users).where(booking_users.c.user_id == user_id)
        )
        if references:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User is referenced by existing bookings",
            )

        await db.delete(user)

    record_write("user", "delete")
    logger.info("user_deleted", user_id=user_id)
