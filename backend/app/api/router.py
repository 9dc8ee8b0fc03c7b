"""
API Router.

Aggregates all API endpoints.
"""

from fastapi import APIRouter
from backend.app.api.endpoints import auth, bookings, trips, vehicles, dashboard

router = APIRouter()

router.include_router(auth.router)
router.include_router(bookings.router)
router.include_router(trips.router)
router.include_router(vehicles.router)
router.include_router(dashboard.router)
