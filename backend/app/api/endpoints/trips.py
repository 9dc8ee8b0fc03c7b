"""
Trip API Endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, status, Path
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.db.session import get_db
from backend.app.schemas.trip import (
    TripCreate,
    TripDetailResponse,
    TripMutationResponse,
    TripStatusUpdate,
)
from backend.app.core.dependencies import get_current_user
from backend.app.services.trip_service import TripService

router = APIRouter(prefix="/trips", tags=["Trips"])


@router.post("", response_model=TripMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a scheduled trip linking a vehicle, crew and bookings.

    References are only checked when strict trip references are enabled.
    """
    trip = await TripService.create_trip(db, trip_data)
    return TripMutationResponse(message="Trip created successfully", trip=trip)


@router.get("", response_model=List[TripDetailResponse])
async def list_trips(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List trips with vehicle, crew and bookings resolved, newest first."""
    return await TripService.list_trips(db)


@router.put("/{trip_id}/status", response_model=TripMutationResponse)
async def update_trip_status(
    trip_id: int = Path(..., description="Trip ID"),
    status_data: TripStatusUpdate = ...,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update a trip's status and, when given, fuel used and distance."""
    trip = await TripService.update_status(
        db, trip_id, status_data.status, status_data.fuel_used, status_data.distance
    )
    return TripMutationResponse(message="Trip updated successfully", trip=trip)
