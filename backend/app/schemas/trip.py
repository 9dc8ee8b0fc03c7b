"""
Trip Pydantic schemas.
"""

from pydantic import Field
from datetime import datetime
from typing import Optional, List
from backend.app.models.trip_enums import TripStatus
from backend.app.schemas.base import CamelModel, UserSummary
from backend.app.schemas.booking import BookingResponse
from backend.app.schemas.vehicle import VehicleResponse


class TripRoute(CamelModel):
    origin: Optional[str] = Field(None, alias="from")
    destination: Optional[str] = Field(None, alias="to")
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None


class TripCreate(CamelModel):
    """Schema for creating a trip. Booking order is preserved."""
    vehicle_id: int
    driver_id: int
    co_driver_id: Optional[int] = None
    route: TripRoute = Field(default_factory=TripRoute)
    bookings: List[int] = Field(default_factory=list)
    border_control_permit: Optional[str] = Field(None, max_length=200)
    tax_valuation_payment: Optional[float] = None
    delivery_confirmation_receipt: Optional[str] = Field(None, max_length=200)


class TripStatusUpdate(CamelModel):
    status: TripStatus
    fuel_used: Optional[float] = None
    distance: Optional[float] = None


class TripBase(CamelModel):
    id: int
    trip_code: str = Field(..., alias="tripId")
    route: TripRoute
    fuel_used: Optional[float] = None
    distance: Optional[float] = None
    status: TripStatus
    border_control_permit: Optional[str] = None
    tax_valuation_payment: Optional[float] = None
    delivery_confirmation_receipt: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TripResponse(TripBase):
    """Trip with plain id references."""
    vehicle_id: int
    driver_id: int
    co_driver_id: Optional[int] = None
    bookings: List[int] = Field(default_factory=list)


class TripDetailResponse(TripBase):
    """Trip with vehicle, crew and bookings resolved for display."""
    vehicle_id: int
    driver_id: int
    co_driver_id: Optional[int] = None
    vehicle: Optional[VehicleResponse] = None
    driver: Optional[UserSummary] = None
    co_driver: Optional[UserSummary] = None
    bookings: List[BookingResponse] = Field(default_factory=list)


class TripMutationResponse(CamelModel):
    message: str
    trip: TripResponse
