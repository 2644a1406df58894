"""
Pytest fixtures for test database, client, and seed data.

Each test gets a fresh schema: tables are created before the test and
dropped afterwards. SQLite in memory is used unless TEST_DATABASE_URL points
at another database (e.g. a throwaway PostgreSQL instance).
"""

import os
from datetime import date
from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.models import User, Trip, Organizer, Booking, booking_users

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory db
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {}


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop tables for isolation."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_kwargs(TEST_DATABASE_URL))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    user = User(name="Alice Traveller", email="alice@example.com")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def second_user(db_session: AsyncSession) -> User:
    user = User(name="Bob Backpacker", email="bob@example.com")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_trip(db_session: AsyncSession) -> Trip:
    trip = Trip(
        name="Ski Trip",
        destination="Aspen",
        start_date=date(2025, 1, 5),
        end_date=date(2025, 1, 10),
    )
    db_session.add(trip)
    await db_session.commit()
    await db_session.refresh(trip)
    return trip


@pytest_asyncio.fixture
async def test_organizer(db_session: AsyncSession) -> Organizer:
    organizer = Organizer(name="Olivia Planner", email="olivia@example.com", phone="555-0100")
    db_session.add(organizer)
    await db_session.commit()
    await db_session.refresh(organizer)
    return organizer


@pytest_asyncio.fixture
async def test_booking(
    db_session: AsyncSession,
    test_trip: Trip,
    test_organizer: Organizer,
    test_user: User,
) -> Booking:
    """A hotel booking with one traveller attached."""
    booking = Booking(
        trip_id=test_trip.id,
        organizer_id=test_organizer.id,
        type="Hotel",
        provider_name="Aspen Lodge",
        booking_ref="AL-1001",
        start_date=date(2025, 1, 5),
        end_date=date(2025, 1, 10),
    )
    db_session.add(booking)
    await db_session.flush()
    await db_session.execute(booking_users.insert().values(booking_id=booking.id, user_id=test_user.id))
    await db_session.commit()
    await db_session.refresh(booking)
    return booking


async def count_rows(db: AsyncSession, table) -> int:
    return (await db.execute(select(func.count()).select_from(table))).scalar()


async def booking_user_ids(db: AsyncSession, booking_id: int) -> set[int]:
    result = await db.execute(
        select(booking_users.c.user_id).where(booking_users.c.booking_id == booking_id)
    )
    return set(result.scalars().all())
