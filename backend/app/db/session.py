"""
Async engine, per-request sessions and the write transaction helper.

Every write service runs its statements inside `transaction()`: the session
commits when the block completes and rolls back on any exception, so a failed
multi-statement write leaves the database untouched.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.metrics import record_rollback

logger = get_logger(__name__)
settings = get_settings()

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    pool_recycle=settings.DB_POOL_RECYCLE,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, closed afterwards."""
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def transaction(db: AsyncSession, resource: str) -> AsyncIterator[AsyncSession]:
    try:
        yield db
        await db.commit()
    except Exception as e:
        await db.rollback()
        record_rollback(resource)
        logger.info("write_rolled_back", resource=resource, reason=type(e).__name__)
        raise
