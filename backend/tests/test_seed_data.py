"""
Tests for the development seed script.
"""

import pytest
from sqlalchemy import select, func

import backend.seed_data as seed_module
from backend.app.models.user import User
from backend.app.models.vehicle import Vehicle
from backend.app.models.vehicle_enums import VehicleType
from conftest import TestingSessionLocal


@pytest.fixture
def seeded_store(monkeypatch):
    async def tables_ready():
        return None

    monkeypatch.setattr(seed_module, "AsyncSessionLocal", TestingSessionLocal)
    monkeypatch.setattr(seed_module, "init_models", tables_ready)


@pytest.mark.asyncio
async def test_seed_creates_admin_driver_and_fleet(seeded_store, client, db_session):
    await seed_module.seed_data()

    vehicles = (await db_session.execute(select(Vehicle))).scalars().all()
    assert len(vehicles) == len(seed_module.FLEET)

    assigned = [v for v in vehicles if v.assigned_driver_id is not None]
    assert [v.vehicle_code for v in assigned] == ["TC-TRK-001"]
    assert assigned[0].vehicle_type == VehicleType.TRUCK

    # Seeded admin can log in through the API
    response = await client.post(
        "/api/auth/login", json={"email": "admin@titancargo.com", "password": "admin123"}
    )
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "admin"


@pytest.mark.asyncio
async def test_seed_is_idempotent(seeded_store, db_session):
    await seed_module.seed_data()
    await seed_module.seed_data()

    users = (await db_session.execute(select(func.count(User.id)))).scalar()
    vehicles = (await db_session.execute(select(func.count(Vehicle.id)))).scalar()
    assert users == 2
    assert vehicles == len(seed_module.FLEET)
