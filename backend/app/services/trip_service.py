"""
Trip Service.

Trip creation, listing and progress updates.
"""

import asyncio
import logging
import time
from collections import defaultdict
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from sqlalchemy.exc import IntegrityError

from backend.app.core.config import settings
from backend.app.core.exceptions import (
    DanglingReferenceError,
    ResourceNotFoundError,
    UniqueCodeExhaustedError,
)
from backend.app.models.booking import Booking
from backend.app.models.trip import Trip, TripBooking
from backend.app.models.trip_enums import TripStatus
from backend.app.models.user import User
from backend.app.models.vehicle import Vehicle
from backend.app.schemas.booking import BookingResponse
from backend.app.schemas.trip import TripCreate, TripDetailResponse, TripResponse
from backend.app.services.booking_service import load_user_summaries
from backend.app.services.vehicle_service import load_vehicles

logger = logging.getLogger(__name__)

TRIP_CODE_PREFIX = "FLT-"


def generate_trip_code() -> str:
    """FLT- + millisecond timestamp."""
    return f"{TRIP_CODE_PREFIX}{int(time.time() * 1000)}"


async def _missing_ids(db: AsyncSession, model, ids: List[int]) -> List[int]:
    wanted = set(ids)
    if not wanted:
        return []
    result = await db.execute(select(model.id).where(model.id.in_(wanted)))
    found = set(result.scalars().all())
    return sorted(wanted - found)


async def _booking_ids_for(db: AsyncSession, trip_ids: List[int]) -> dict:
    """Booking ids per trip, in the order they were given at creation."""
    by_trip = defaultdict(list)
    if not trip_ids:
        return by_trip
    result = await db.execute(
        select(TripBooking)
        .where(TripBooking.trip_id.in_(trip_ids))
        .order_by(TripBooking.trip_id, TripBooking.position)
    )
    for link in result.scalars().all():
        by_trip[link.trip_id].append(link.booking_id)
    return by_trip


def _to_response(trip: Trip, booking_ids: List[int]) -> TripResponse:
    response = TripResponse.model_validate(trip)
    response.bookings = list(booking_ids)
    return response


async def resolve_trips(db: AsyncSession, trips: List[Trip]) -> List[TripDetailResponse]:
    """
    Resolve vehicle, driver, co-driver and bookings for display.

    References that do not resolve (lenient mode) come back as null or are
    left out of the bookings list.
    """
    booking_ids = await _booking_ids_for(db, [t.id for t in trips])
    vehicles = await load_vehicles(db, (t.vehicle_id for t in trips))
    crew = await load_user_summaries(
        db, [t.driver_id for t in trips] + [t.co_driver_id for t in trips]
    )

    all_booking_ids = {bid for ids in booking_ids.values() for bid in ids}
    bookings = {}
    if all_booking_ids:
        result = await db.execute(select(Booking).where(Booking.id.in_(all_booking_ids)))
        bookings = {b.id: BookingResponse.model_validate(b) for b in result.scalars().all()}

    details = []
    for trip in trips:
        detail = TripDetailResponse.model_validate(trip)
        detail.vehicle = vehicles.get(trip.vehicle_id)
        detail.driver = crew.get(trip.driver_id)
        detail.co_driver = crew.get(trip.co_driver_id)
        detail.bookings = [bookings[bid] for bid in booking_ids[trip.id] if bid in bookings]
        details.append(detail)
    return details


class TripService:

    @staticmethod
    async def check_references(db: AsyncSession, data: TripCreate):
        """
        Strict mode: every referenced vehicle, user and booking must exist.

        Raises:
            DanglingReferenceError: on the first kind of reference that misses
        """
        missing = await _missing_ids(db, Vehicle, [data.vehicle_id])
        if missing:
            raise DanglingReferenceError("vehicle", missing)

        crew_ids = [data.driver_id] + ([data.co_driver_id] if data.co_driver_id is not None else [])
        missing = await _missing_ids(db, User, crew_ids)
        if missing:
            raise DanglingReferenceError("driver", missing)

        missing = await _missing_ids(db, Booking, data.bookings)
        if missing:
            raise DanglingReferenceError("booking", missing)

    @staticmethod
    async def create_trip(db: AsyncSession, data: TripCreate, strict: Optional[bool] = None) -> TripResponse:
        """
        Create a scheduled trip.

        Args:
            strict: validate references before linking; defaults to
                ``settings.strict_trip_references``
        """
        if strict is None:
            strict = settings.strict_trip_references
        if strict:
            await TripService.check_references(db, data)

        for attempt in range(1, settings.trip_code_max_attempts + 1):
            trip = Trip(
                trip_code=generate_trip_code(),
                vehicle_id=data.vehicle_id,
                driver_id=data.driver_id,
                co_driver_id=data.co_driver_id,
                origin=data.route.origin,
                destination=data.route.destination,
                departure_time=data.route.departure_time,
                arrival_time=data.route.arrival_time,
                border_control_permit=data.border_control_permit,
                tax_valuation_payment=data.tax_valuation_payment,
                delivery_confirmation_receipt=data.delivery_confirmation_receipt,
                status=TripStatus.SCHEDULED,
            )
            db.add(trip)
            try:
                await db.flush()  # Get trip ID
                for position, booking_id in enumerate(data.bookings):
                    db.add(TripBooking(trip_id=trip.id, booking_id=booking_id, position=position))
                await db.commit()
            except IntegrityError:
                await db.rollback()
                logger.warning("Trip code collision (attempt %d)", attempt)
                # Codes are time based; wait for the clock to move on
                await asyncio.sleep(0.002)
                continue

            await db.refresh(trip)
            logger.info("Trip %s created for vehicle id=%s", trip.trip_code, trip.vehicle_id)
            return _to_response(trip, data.bookings)

        raise UniqueCodeExhaustedError("trip code")

    @staticmethod
    async def list_trips(db: AsyncSession) -> List[TripDetailResponse]:
        """All trips, resolved, newest first."""
        result = await db.execute(
            select(Trip).order_by(desc(Trip.created_at), desc(Trip.id))
        )
        return await resolve_trips(db, list(result.scalars().all()))

    @staticmethod
    async def update_status(
        db: AsyncSession,
        trip_id: int,
        new_status: TripStatus,
        fuel_used: Optional[float] = None,
        distance: Optional[float] = None
    ) -> TripResponse:
        """
        Set a trip's status. fuel_used and distance overwrite the stored
        values whenever they are given.
        """
        result = await db.execute(select(Trip).where(Trip.id == trip_id))
        trip = result.scalar_one_or_none()
        if not trip:
            raise ResourceNotFoundError("Trip", trip_id)

        trip.status = new_status
        if fuel_used is not None:
            trip.fuel_used = fuel_used
        if distance is not None:
            trip.distance = distance
        trip.updated_at = datetime.now(timezone.utc)

        await db.commit()
        await db.refresh(trip)

        logger.info("Trip %s status -> %s", trip.trip_code, new_status.value)
        booking_ids = await _booking_ids_for(db, [trip.id])
        return _to_response(trip, booking_ids[trip.id])
