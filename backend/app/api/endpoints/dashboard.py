"""
Dashboard API Endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.db.session import get_db
from backend.app.schemas.dashboard import DashboardStats
from backend.app.core.dependencies import get_current_user
from backend.app.services.analytics import AnalyticsService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_stats(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Dashboard totals, the 10 latest bookings and trips in progress.

    ``totalRevenue`` only sums bookings whose payment status is ``paid``.
    """
    return await AnalyticsService.get_dashboard_stats(db)
