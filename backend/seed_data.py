"""
Database seeding script for initial users and fleet.

Creates an ADMIN, a DRIVER and a starter fleet of vehicles for development.
The API has no vehicle-creation route, so this is how vehicles get in.
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.app.core.config import settings
from backend.app.core.observability import configure_logging
from backend.app.db.session import AsyncSessionLocal, init_models
from backend.app.models.user import User
from backend.app.models.vehicle import Vehicle
from backend.app.models.enums import UserRole
from backend.app.models.vehicle_enums import VehicleType, VehicleStatus
from backend.app.core.security import get_password_hash
from sqlalchemy import select

logger = logging.getLogger("seed_data")

FLEET = [
    ("TC-PLN-001", VehicleType.PLANE, "Boeing 777F", 102000, "LAX"),
    ("TC-PLN-002", VehicleType.PLANE, "Airbus A330-200F", 70000, "JFK"),
    ("TC-SHP-001", VehicleType.SHIP, "Feeder 1700 TEU", 22000000, "Port of Long Beach"),
    ("TC-TRN-001", VehicleType.TRAIN, "Intermodal 100-car", 6500000, "Chicago"),
    ("TC-TRK-001", VehicleType.TRUCK, "Freightliner Cascadia", 20000, "Dallas"),
    ("TC-TRK-002", VehicleType.TRUCK, "Volvo VNL 860", 20000, "Miami"),
]


async def seed_data():
    """
    Seed initial users and vehicles.

    Creates:
    - 1 ADMIN user
    - 1 DRIVER user, assigned to the first truck
    - the FLEET vehicles
    """
    await init_models()

    async with AsyncSessionLocal() as db:
        logger.info("Starting seeding...")

        result = await db.execute(
            select(User).where(User.email == "admin@titancargo.com")
        )
        if result.scalar_one_or_none():
            logger.info("ADMIN user already exists, skipping seeding")
            return

        admin_user = User(
            name="Administrator",
            email="admin@titancargo.com",
            hashed_password=get_password_hash("admin123"),
            role=UserRole.ADMIN,
        )
        driver = User(
            name="Default Driver",
            email="driver@titancargo.com",
            hashed_password=get_password_hash("driver123"),
            role=UserRole.DRIVER,
        )
        db.add_all([admin_user, driver])
        await db.flush()
        logger.info("Created ADMIN (admin@titancargo.com) and DRIVER (driver@titancargo.com)")

        first_truck = True
        for code, vehicle_type, model, capacity, location in FLEET:
            vehicle = Vehicle(
                vehicle_code=code,
                vehicle_type=vehicle_type,
                model=model,
                capacity=capacity,
                status=VehicleStatus.OPERATING,
                current_location=location,
            )
            if vehicle_type == VehicleType.TRUCK and first_truck:
                vehicle.assigned_driver_id = driver.id
                first_truck = False
            db.add(vehicle)

        await db.commit()
        logger.info("Created %d vehicles", len(FLEET))
        logger.info("Seeding completed against %s", settings.database_url.split("@")[-1])


if __name__ == "__main__":
    configure_logging(settings.log_level)
    asyncio.run(seed_data())
