"""
Booking Pydantic schemas.

Defines request and response models for booking management.
"""

from pydantic import Field
from datetime import datetime
from typing import Optional
from backend.app.models.booking_enums import BookingStatus, PaymentStatus, CargoType
from backend.app.schemas.base import CamelModel, UserSummary


class CargoDimensions(CamelModel):
    length: Optional[float] = Field(None, ge=0)
    width: Optional[float] = Field(None, ge=0)
    height: Optional[float] = Field(None, ge=0)


class CargoDetails(CamelModel):
    description: str = Field(..., min_length=1, max_length=500)
    weight: float = Field(..., ge=0, description="Weight in kilograms")
    dimensions: Optional[CargoDimensions] = None
    type: CargoType = CargoType.GENERAL


class BookingRoute(CamelModel):
    # arrival_date >= departure_date is not enforced
    origin: str = Field(..., min_length=1, alias="from")
    destination: str = Field(..., min_length=1, alias="to")
    departure_date: datetime
    arrival_date: datetime


class BookingCreate(CamelModel):
    """Schema for creating a new booking."""
    cargo_details: CargoDetails
    route: BookingRoute
    price: float = Field(..., ge=0)


class BookingStatusUpdate(CamelModel):
    status: BookingStatus


class PaymentStatusUpdate(CamelModel):
    payment_status: PaymentStatus


class BookingResponse(CamelModel):
    """Schema for booking response."""
    id: int
    airway_bill: str
    client_id: int
    client: Optional[UserSummary] = None
    cargo_details: CargoDetails
    route: BookingRoute
    status: BookingStatus
    price: float
    payment_status: PaymentStatus
    created_at: datetime
    updated_at: datetime


class BookingMutationResponse(CamelModel):
    message: str
    booking: BookingResponse


