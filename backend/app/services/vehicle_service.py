"""
Vehicle Service.

Fleet listing and status updates.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc

from backend.app.core.exceptions import ResourceNotFoundError
from backend.app.models.vehicle import Vehicle
from backend.app.models.vehicle_enums import VehicleStatus
from backend.app.schemas.vehicle import VehicleResponse
from backend.app.services.booking_service import load_user_summaries

logger = logging.getLogger(__name__)


async def load_vehicles(db: AsyncSession, vehicle_ids: Iterable[Optional[int]]) -> Dict[int, VehicleResponse]:
    """Fetch vehicles by id in one query, keyed by id."""
    ids = {vid for vid in vehicle_ids if vid is not None}
    if not ids:
        return {}
    result = await db.execute(select(Vehicle).where(Vehicle.id.in_(ids)))
    return {vehicle.id: VehicleResponse.model_validate(vehicle) for vehicle in result.scalars().all()}


class VehicleService:

    @staticmethod
    async def list_vehicles(db: AsyncSession) -> List[VehicleResponse]:
        """All vehicles with the assigned driver resolved, newest first."""
        result = await db.execute(
            select(Vehicle).order_by(desc(Vehicle.created_at), desc(Vehicle.id))
        )
        vehicles = list(result.scalars().all())
        drivers = await load_user_summaries(db, (v.assigned_driver_id for v in vehicles))

        responses = []
        for vehicle in vehicles:
            response = VehicleResponse.model_validate(vehicle)
            response.assigned_driver = drivers.get(vehicle.assigned_driver_id)
            responses.append(response)
        return responses

    @staticmethod
    async def update_status(
        db: AsyncSession,
        vehicle_id: int,
        new_status: VehicleStatus,
        current_location: Optional[str] = None
    ) -> VehicleResponse:
        """
        Set a vehicle's status and optionally its location.

        No transition rules: any status can follow any other.
        """
        result = await db.execute(select(Vehicle).where(Vehicle.id == vehicle_id))
        vehicle = result.scalar_one_or_none()
        if not vehicle:
            raise ResourceNotFoundError("Vehicle", vehicle_id)

        vehicle.status = new_status
        if current_location is not None:
            vehicle.current_location = current_location
        vehicle.updated_at = datetime.now(timezone.utc)

        await db.commit()
        await db.refresh(vehicle)

        logger.info("Vehicle %s status -> %s", vehicle.vehicle_code, new_status.value)
        return VehicleResponse.model_validate(vehicle)
