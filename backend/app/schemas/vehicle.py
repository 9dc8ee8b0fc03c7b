"""
Vehicle Pydantic schemas.
"""

from pydantic import Field
from datetime import datetime
from typing import Optional
from backend.app.models.vehicle_enums import VehicleType, VehicleStatus
from backend.app.schemas.base import CamelModel, UserSummary


class VehicleStatusUpdate(CamelModel):
    status: VehicleStatus
    current_location: Optional[str] = Field(None, max_length=200)


class VehicleResponse(CamelModel):
    id: int
    vehicle_code: str = Field(..., alias="vehicleId")
    vehicle_type: VehicleType = Field(..., alias="type")
    model: Optional[str] = None
    capacity: Optional[float] = None
    status: VehicleStatus
    current_location: Optional[str] = None
    assigned_driver_id: Optional[int] = None
    assigned_driver: Optional[UserSummary] = None
    created_at: datetime


class VehicleMutationResponse(CamelModel):
    message: str
    vehicle: VehicleResponse
