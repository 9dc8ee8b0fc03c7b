"""
Booking Service.

Create, read and status updates for cargo bookings with owner/admin
visibility rules.
"""

import logging
import secrets
import string
import time
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from sqlalchemy.exc import IntegrityError

from backend.app.core.config import settings
from backend.app.core.exceptions import ResourceNotFoundError, UniqueCodeExhaustedError
from backend.app.core.guards import OwnershipGuard
from backend.app.models.booking import Booking
from backend.app.models.booking_enums import BookingStatus, PaymentStatus
from backend.app.models.user import User
from backend.app.schemas.base import UserSummary
from backend.app.schemas.booking import BookingCreate, BookingResponse

logger = logging.getLogger(__name__)

ownership_guard = OwnershipGuard()

AIRWAY_BILL_PREFIX = "AWB"
AIRWAY_BILL_SUFFIX_LENGTH = 5
_SUFFIX_ALPHABET = string.digits + string.ascii_uppercase


def generate_airway_bill() -> str:
    """AWB + millisecond timestamp + 5 random base-36 characters."""
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(AIRWAY_BILL_SUFFIX_LENGTH))
    return f"{AIRWAY_BILL_PREFIX}{int(time.time() * 1000)}{suffix}"


async def load_user_summaries(db: AsyncSession, user_ids: Iterable[Optional[int]]) -> Dict[int, UserSummary]:
    """Fetch display summaries for a set of user ids in one query."""
    ids = {uid for uid in user_ids if uid is not None}
    if not ids:
        return {}
    result = await db.execute(select(User).where(User.id.in_(ids)))
    return {user.id: UserSummary.model_validate(user) for user in result.scalars().all()}


async def to_responses(db: AsyncSession, bookings: List[Booking]) -> List[BookingResponse]:
    """Serialize bookings with their client resolved."""
    clients = await load_user_summaries(db, (b.client_id for b in bookings))
    responses = []
    for booking in bookings:
        response = BookingResponse.model_validate(booking)
        response.client = clients.get(booking.client_id)
        responses.append(response)
    return responses


async def _airway_bill_taken(db: AsyncSession, airway_bill: str) -> bool:
    result = await db.execute(select(Booking.id).where(Booking.airway_bill == airway_bill))
    return result.first() is not None


async def _user_exists(db: AsyncSession, user_id: int) -> bool:
    result = await db.execute(select(User.id).where(User.id == user_id))
    return result.first() is not None


class BookingService:

    @staticmethod
    async def _get_or_404(db: AsyncSession, booking_id: int) -> Booking:
        result = await db.execute(select(Booking).where(Booking.id == booking_id))
        booking = result.scalar_one_or_none()
        if not booking:
            raise ResourceNotFoundError("Booking", booking_id)
        return booking

    @staticmethod
    async def create_booking(db: AsyncSession, current_user: dict, data: BookingCreate) -> BookingResponse:
        """
        Create a pending booking owned by the caller.

        The unique constraint on ``airway_bill`` is authoritative; a collision
        is retried with a fresh code up to ``airway_bill_max_attempts`` times.
        Any other integrity failure is not a collision: a token whose user was
        deleted gets a 404, anything else propagates.
        """
        owner_id = current_user["user_id"]
        cargo = data.cargo_details
        dimensions = cargo.dimensions

        for attempt in range(1, settings.airway_bill_max_attempts + 1):
            airway_bill = generate_airway_bill()
            booking = Booking(
                airway_bill=airway_bill,
                client_id=owner_id,
                cargo_description=cargo.description,
                cargo_weight=cargo.weight,
                cargo_length=dimensions.length if dimensions else None,
                cargo_width=dimensions.width if dimensions else None,
                cargo_height=dimensions.height if dimensions else None,
                cargo_type=cargo.type,
                origin=data.route.origin,
                destination=data.route.destination,
                departure_date=data.route.departure_date,
                arrival_date=data.route.arrival_date,
                price=data.price,
                status=BookingStatus.PENDING,
                payment_status=PaymentStatus.PENDING,
            )
            db.add(booking)
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                if await _airway_bill_taken(db, airway_bill):
                    logger.warning("Airway bill collision on %s (attempt %d)", airway_bill, attempt)
                    continue
                if not await _user_exists(db, owner_id):
                    # Token outlived its identity
                    logger.warning("Booking rejected: owner id=%s no longer exists", owner_id)
                    raise ResourceNotFoundError("User", owner_id)
                raise

            await db.refresh(booking)
            logger.info("Booking %s created by user id=%s", booking.airway_bill, booking.client_id)
            return (await to_responses(db, [booking]))[0]

        raise UniqueCodeExhaustedError("airway bill")

    @staticmethod
    async def list_bookings(db: AsyncSession, current_user: dict) -> List[BookingResponse]:
        """Admins see every booking, everyone else only their own. Newest first."""
        query = select(Booking)
        owner_filter = ownership_guard.filter_by_ownership(current_user)
        if owner_filter is not None:
            query = query.where(Booking.client_id == owner_filter)
        query = query.order_by(desc(Booking.created_at), desc(Booking.id))

        result = await db.execute(query)
        return await to_responses(db, list(result.scalars().all()))

    @staticmethod
    async def get_booking(db: AsyncSession, current_user: dict, booking_id: int) -> BookingResponse:
        booking = await BookingService._get_or_404(db, booking_id)
        ownership_guard.enforce(booking.client_id, current_user)
        return (await to_responses(db, [booking]))[0]

    @staticmethod
    async def update_status(db: AsyncSession, current_user: dict, booking_id: int, new_status: BookingStatus) -> BookingResponse:
        """
        Set a booking's status.

        Any authenticated caller may update any booking here; unlike
        ``get_booking`` there is no ownership check.
        """
        booking = await BookingService._get_or_404(db, booking_id)

        booking.status = new_status
        booking.updated_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(booking)

        logger.info(
            "Booking %s status -> %s by user id=%s",
            booking.airway_bill, new_status.value, current_user.get("user_id")
        )
        return (await to_responses(db, [booking]))[0]

    @staticmethod
    async def update_payment_status(db: AsyncSession, current_user: dict, booking_id: int, payment_status: PaymentStatus) -> BookingResponse:
        booking = await BookingService._get_or_404(db, booking_id)

        booking.payment_status = payment_status
        booking.updated_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(booking)

        logger.info(
            "Booking %s payment -> %s by user id=%s",
            booking.airway_bill, payment_status.value, current_user.get("user_id")
        )
        return (await to_responses(db, [booking]))[0]
