from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.stats import DashboardStats
from app.services.stats_service import get_dashboard_stats

router = APIRouter(prefix="/stats", tags=["Dashboard"])


@router.get("", response_model=DashboardStats)
async def dashboard_stats_endpoint(db: AsyncSession = Depends(get_db)):
    """Totals shown on the dashboard."""
    return await get_dashboard_stats(db)
