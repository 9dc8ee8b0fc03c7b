"""
Integration tests for the Authentication Flow.

Verifies Register -> Login -> Profile and the auth gate responses.
"""

import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy import select

from backend.app.core.jwt import token_service
from backend.app.models.user import User
from api_helpers import auth_header, register_user


@pytest.mark.asyncio
async def test_register_returns_token_and_user_without_password(client):
    response = await client.post("/api/auth/register", json={
        "name": "Alice",
        "email": "alice@titan.test",
        "password": "s3cret-pass",
        "phone": "+1-555-0100",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["token"]
    assert data["user"]["email"] == "alice@titan.test"
    assert data["user"]["role"] == "user"
    assert "password" not in data["user"]
    assert "hashedPassword" not in data["user"]


@pytest.mark.asyncio
async def test_password_is_stored_hashed(client, db_session):
    await register_user(client, "hash@titan.test", password="plain-text-pw")

    result = await db_session.execute(select(User).where(User.email == "hash@titan.test"))
    user = result.scalar_one()
    assert user.hashed_password != "plain-text-pw"
    assert user.hashed_password.startswith("$2b$10$")


@pytest.mark.asyncio
async def test_duplicate_email_rejected(client):
    await register_user(client, "dup@titan.test")

    response = await client.post("/api/auth/register", json={
        "name": "Someone Else",
        "email": "dup@titan.test",
        "password": "another",
    })

    assert response.status_code == 400
    assert response.json()["error"] == "User already exists"


@pytest.mark.asyncio
async def test_email_match_is_case_sensitive(client):
    await register_user(client, "Case@titan.test")

    response = await client.post("/api/auth/register", json={
        "name": "Lower",
        "email": "case@titan.test",
        "password": "password123",
    })

    assert response.status_code == 201


@pytest.mark.asyncio
@pytest.mark.parametrize("role,expected", [
    ("admin", "admin"),
    ("driver", "driver"),
    ("pilot", "pilot"),
    ("superuser", "user"),
    (None, "user"),
])
async def test_register_role_defaults_to_user(client, role, expected):
    payload = {"name": "R", "email": f"role-{expected}-{role}@titan.test", "password": "pw"}
    if role is not None:
        payload["role"] = role

    response = await client.post("/api/auth/register", json=payload)

    assert response.status_code == 201
    assert response.json()["user"]["role"] == expected


@pytest.mark.asyncio
async def test_register_missing_fields_is_validation_error(client):
    response = await client.post("/api/auth/register", json={"email": "x@titan.test"})

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"


@pytest.mark.asyncio
async def test_admin_register_login_profile_scenario(client):
    registered = await register_user(client, "a@x.com", role="admin", password="pw1")

    login = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "pw1"})
    assert login.status_code == 200
    login_token = login.json()["token"]
    assert login_token != registered["token"]
    assert token_service.verify(login_token)["role"] == "admin"

    profile = await client.get("/api/auth/profile", headers=auth_header(login_token))
    assert profile.status_code == 200
    data = profile.json()
    assert data["role"] == "admin"
    assert data["email"] == "a@x.com"
    assert "password" not in data
    assert "hashedPassword" not in data


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(client):
    await register_user(client, "known@titan.test", password="right-password")

    wrong_password = await client.post(
        "/api/auth/login", json={"email": "known@titan.test", "password": "wrong-password"}
    )
    unknown_email = await client.post(
        "/api/auth/login", json={"email": "nobody@titan.test", "password": "right-password"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_updates_last_login(client):
    registered = await register_user(client, "last@titan.test")
    before = await client.get("/api/auth/profile", headers=auth_header(registered["token"]))
    assert before.json()["lastLogin"] is None

    await client.post("/api/auth/login", json={"email": "last@titan.test", "password": "password123"})

    after = await client.get("/api/auth/profile", headers=auth_header(registered["token"]))
    assert after.json()["lastLogin"] is not None


@pytest.mark.asyncio
async def test_profile_requires_token(client):
    response = await client.get("/api/auth/profile")

    assert response.status_code == 401
    assert response.json()["error"] == "Access token required"


@pytest.mark.asyncio
async def test_profile_rejects_invalid_token(client):
    response = await client.get("/api/auth/profile", headers=auth_header("garbage.token.value"))

    assert response.status_code == 403
    assert response.json()["error"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_profile_rejects_expired_token(client):
    user = await register_user(client, "late@titan.test")
    issued_at = datetime.now(timezone.utc) - timedelta(hours=24, minutes=1)
    token = token_service.issue(
        user_id=user["user"]["id"], email="late@titan.test", role="user", issued_at=issued_at
    )

    response = await client.get("/api/auth/profile", headers=auth_header(token))

    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "Invalid or expired token"
    assert body["error_code"] == "ERR_AUTH_002"


@pytest.mark.asyncio
async def test_profile_for_missing_user_is_not_found(client):
    # Valid signature, but the identity was never stored
    token = token_service.issue(user_id=999, email="ghost@titan.test", role="user")

    response = await client.get("/api/auth/profile", headers=auth_header(token))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_profile_changes_only_given_fields(client):
    registered = await register_user(client, "edit@titan.test", name="Before")
    headers = auth_header(registered["token"])

    response = await client.put("/api/auth/profile", json={"phone": "+1-555-0199"}, headers=headers)

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["phone"] == "+1-555-0199"
    assert user["name"] == "Before"

    response = await client.put(
        "/api/auth/profile", json={"name": "After", "address": "1 Dock Rd"}, headers=headers
    )
    user = response.json()["user"]
    assert user["name"] == "After"
    assert user["address"] == "1 Dock Rd"
    assert user["phone"] == "+1-555-0199"
