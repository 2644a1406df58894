"""
Dashboard counters.
"""

from datetime import date
from typing import Optional

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import User, Trip, Organizer, Booking
from app.schemas.stats import DashboardStats


async def _count(db: AsyncSession, model, *criteria) -> int:
    query = select(func.count()).select_from(model)
    if criteria:
        query = query.where(*criteria)
    return (await db.execute(query)).scalar() or 0


async def get_dashboard_stats(db: AsyncSession, today: Optional[date] = None) -> DashboardStats:
    """A trip is active until its end date has passed; open-ended trips stay active."""
    today = today or date.today()
    return DashboardStats(
        total_users=await _count(db, User),
        active_trips=await _count(db, Trip, or_(Trip.end_date.is_(None), Trip.end_date >= today)),
        trip_organizers=await _count(db, Organizer),
        total_bookings=await _count(db, Booking),
    )
