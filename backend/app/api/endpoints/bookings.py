"""
Booking API Endpoints.

Clients create and view their bookings; admins see all of them.
"""

from typing import List
from fastapi import APIRouter, Depends, status, Path
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.db.session import get_db
from backend.app.schemas.booking import (
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
    BookingMutationResponse,
    PaymentStatusUpdate,
)
from backend.app.core.dependencies import get_current_user
from backend.app.core.guards import require_role
from backend.app.models.enums import UserRole
from backend.app.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("", response_model=BookingMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a booking owned by the caller.

    Generates the airway bill; status and payment start as ``pending``.
    """
    booking = await BookingService.create_booking(db, current_user, booking_data)
    return BookingMutationResponse(message="Booking created successfully", booking=booking)


@router.get("", response_model=List[BookingResponse])
async def list_bookings(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List bookings, newest first. Non-admins only see their own."""
    return await BookingService.list_bookings(db, current_user)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int = Path(..., description="Booking ID"),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get one booking. Only its owner or an admin may read it."""
    return await BookingService.get_booking(db, current_user, booking_id)


@router.put("/{booking_id}/status", response_model=BookingMutationResponse)
async def update_booking_status(
    booking_id: int = Path(..., description="Booking ID"),
    status_data: BookingStatusUpdate = ...,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Update a booking's status.

    Note: no ownership check, any authenticated caller can change any booking.
    """
    booking = await BookingService.update_status(db, current_user, booking_id, status_data.status)
    return BookingMutationResponse(message="Booking status updated", booking=booking)


@router.put("/{booking_id}/payment-status", response_model=BookingMutationResponse)
async def update_payment_status(
    booking_id: int = Path(..., description="Booking ID"),
    payment_data: PaymentStatusUpdate = ...,
    current_user: dict = Depends(require_role([UserRole.ADMIN])),
    db: AsyncSession = Depends(get_db)
):
    """Record payment or refund for a booking (admin only)."""
    booking = await BookingService.update_payment_status(
        db, current_user, booking_id, payment_data.payment_status
    )
    return BookingMutationResponse(message="Payment status updated", booking=booking)
