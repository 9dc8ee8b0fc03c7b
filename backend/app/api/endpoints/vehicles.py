"""
Vehicle (fleet) API Endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.db.session import get_db
from backend.app.schemas.vehicle import VehicleResponse, VehicleStatusUpdate, VehicleMutationResponse
from backend.app.core.dependencies import get_current_user
from backend.app.services.vehicle_service import VehicleService

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


@router.get("", response_model=List[VehicleResponse])
async def list_vehicles(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await VehicleService.list_vehicles(db)


@router.put("/{vehicle_id}/status", response_model=VehicleMutationResponse)
async def update_vehicle_status(
    vehicle_id: int = Path(..., description="Vehicle ID"),
    status_data: VehicleStatusUpdate = ...,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update a vehicle's status and optionally its current location."""
    vehicle = await VehicleService.update_status(
        db, vehicle_id, status_data.status, status_data.current_location
    )
    return VehicleMutationResponse(message="Vehicle status updated", vehicle=vehicle)
