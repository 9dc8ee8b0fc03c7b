"""
Analytics Service.

Handles data aggregation for the dashboard.
Focused on READ-ONLY operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc

from backend.app.models.booking import Booking
from backend.app.models.booking_enums import PaymentStatus
from backend.app.models.trip import Trip
from backend.app.models.trip_enums import TripStatus
from backend.app.models.vehicle import Vehicle
from backend.app.schemas.dashboard import DashboardStats, DashboardTotals
from backend.app.services.booking_service import to_responses
from backend.app.services.trip_service import resolve_trips

RECENT_BOOKINGS_LIMIT = 10


class AnalyticsService:

    @staticmethod
    async def get_dashboard_stats(db: AsyncSession) -> DashboardStats:
        """Counts, paid revenue, latest bookings and in-progress trips."""

        total_bookings = (await db.execute(select(func.count(Booking.id)))).scalar() or 0

        # Revenue only counts paid bookings
        revenue_query = select(func.sum(Booking.price)).where(
            Booking.payment_status == PaymentStatus.PAID
        )
        total_revenue = (await db.execute(revenue_query)).scalar() or 0.0

        total_trips = (await db.execute(select(func.count(Trip.id)))).scalar() or 0
        total_vehicles = (await db.execute(select(func.count(Vehicle.id)))).scalar() or 0

        recent_result = await db.execute(
            select(Booking)
            .order_by(desc(Booking.created_at), desc(Booking.id))
            .limit(RECENT_BOOKINGS_LIMIT)
        )
        recent_bookings = await to_responses(db, list(recent_result.scalars().all()))

        active_result = await db.execute(
            select(Trip)
            .where(Trip.status == TripStatus.IN_PROGRESS)
            .order_by(desc(Trip.created_at), desc(Trip.id))
        )
        active_trips = await resolve_trips(db, list(active_result.scalars().all()))

        return DashboardStats(
            stats=DashboardTotals(
                total_bookings=total_bookings,
                total_revenue=total_revenue,
                total_trips=total_trips,
                total_vehicles=total_vehicles,
            ),
            recent_bookings=recent_bookings,
            active_trips=active_trips,
        )
