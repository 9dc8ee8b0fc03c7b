"""
Tests for the error envelope, health endpoints and unhandled failures.
"""

import pytest
from httpx import AsyncClient, ASGITransport

from backend.app.core.config import settings
from backend.app.db.session import get_db
from backend.app.main import app
from api_helpers import auth_header


async def broken_get_db():
    raise RuntimeError("database exploded")
    yield  # pragma: no cover


@pytest.fixture
async def broken_client(user_a):
    """Client whose database dependency always fails. Registers user_a first."""
    previous = app.dependency_overrides.get(get_db)
    app.dependency_overrides[get_db] = broken_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides[get_db] = previous


@pytest.mark.asyncio
async def test_unknown_route_not_found(client):
    response = await client.get("/api/does-not-exist")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Route not found"
    assert body["error_code"] == "ERR_NOT_FOUND"


@pytest.mark.asyncio
async def test_health_and_root(client):
    health = await client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"

    root = await client.get("/")
    assert root.status_code == 200
    assert root.json()["health"] == "/health"


@pytest.mark.asyncio
async def test_responses_carry_correlation_id(client):
    response = await client.get("/health", headers={"X-Correlation-ID": "trace-123"})

    assert response.headers["X-Correlation-ID"] == "trace-123"
    assert "X-Process-Time" in response.headers


@pytest.mark.asyncio
async def test_unhandled_error_shows_message_in_development(broken_client, user_a, monkeypatch):
    monkeypatch.setattr(settings, "environment", "development")

    response = await broken_client.get("/api/bookings", headers=auth_header(user_a["token"]))

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Something went wrong!"
    assert body["message"] == "database exploded"


@pytest.mark.asyncio
async def test_unhandled_error_hides_message_in_production(broken_client, user_a, monkeypatch):
    monkeypatch.setattr(settings, "environment", "production")

    response = await broken_client.get("/api/bookings", headers=auth_header(user_a["token"]))

    assert response.status_code == 500
    assert response.json()["message"] == "Internal server error"
