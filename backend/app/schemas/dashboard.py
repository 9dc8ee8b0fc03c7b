"""
Dashboard Pydantic schemas.
"""

from typing import List
from backend.app.schemas.base import CamelModel
from backend.app.schemas.booking import BookingResponse
from backend.app.schemas.trip import TripDetailResponse


class DashboardTotals(CamelModel):
    total_bookings: int
    total_revenue: float
    total_trips: int
    total_vehicles: int


class DashboardStats(CamelModel):
    stats: DashboardTotals
    recent_bookings: List[BookingResponse]
    active_trips: List[TripDetailResponse]
