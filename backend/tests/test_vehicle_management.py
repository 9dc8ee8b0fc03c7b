"""
Integration tests for Vehicle (fleet) Management.
"""

import pytest

from backend.app.models.vehicle import Vehicle
from backend.app.models.vehicle_enums import VehicleType, VehicleStatus
from api_helpers import auth_header, register_user


@pytest.fixture
async def fleet(client, db_session):
    """A pilot-assigned plane and an unassigned ship."""
    pilot = await register_user(client, "pilot@titan.test", role="pilot", name="Pat Pilot")
    plane = Vehicle(
        vehicle_code="TC-PLN-001",
        vehicle_type=VehicleType.PLANE,
        model="Boeing 777F",
        capacity=102000,
        current_location="LAX",
        assigned_driver_id=pilot["user"]["id"],
    )
    db_session.add(plane)
    await db_session.commit()

    ship = Vehicle(
        vehicle_code="TC-SHP-001",
        vehicle_type=VehicleType.SHIP,
        capacity=22000000,
        status=VehicleStatus.MAINTENANCE,
    )
    db_session.add(ship)
    await db_session.commit()
    return plane, ship


@pytest.mark.asyncio
async def test_list_vehicles_resolves_driver(client, user_a, fleet):
    plane, ship = fleet

    response = await client.get("/api/vehicles", headers=auth_header(user_a["token"]))

    assert response.status_code == 200
    vehicles = response.json()
    assert [v["vehicleId"] for v in vehicles] == ["TC-SHP-001", "TC-PLN-001"]
    assert vehicles[0]["assignedDriver"] is None
    assert vehicles[0]["status"] == "maintenance"
    assert vehicles[1]["type"] == "plane"
    assert vehicles[1]["assignedDriver"]["name"] == "Pat Pilot"


@pytest.mark.asyncio
async def test_list_vehicles_requires_token(client):
    response = await client.get("/api/vehicles")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_update_vehicle_status_any_transition(client, user_a, fleet):
    plane, _ = fleet
    url = f"/api/vehicles/{plane.id}/status"
    headers = auth_header(user_a["token"])

    response = await client.put(url, json={"status": "grounded", "currentLocation": "SFO"}, headers=headers)
    assert response.status_code == 200
    vehicle = response.json()["vehicle"]
    assert vehicle["status"] == "grounded"
    assert vehicle["currentLocation"] == "SFO"

    response = await client.put(url, json={"status": "operating"}, headers=headers)
    vehicle = response.json()["vehicle"]
    assert vehicle["status"] == "operating"
    assert vehicle["currentLocation"] == "SFO"


@pytest.mark.asyncio
async def test_update_missing_vehicle_not_found(client, user_a):
    response = await client.put(
        "/api/vehicles/4040/status", json={"status": "grounded"}, headers=auth_header(user_a["token"])
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Vehicle not found"


@pytest.mark.asyncio
async def test_update_vehicle_rejects_unknown_status(client, user_a, fleet):
    plane, _ = fleet

    response = await client.put(
        f"/api/vehicles/{plane.id}/status", json={"status": "flying"}, headers=auth_header(user_a["token"])
    )

    assert response.status_code == 400
