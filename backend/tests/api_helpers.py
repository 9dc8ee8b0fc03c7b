"""
Request helpers shared by the API tests.
"""


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def register_user(client, email: str, role: str = "user", password: str = "password123", name: str = None) -> dict:
    response = await client.post("/api/auth/register", json={
        "name": name or email.split("@")[0],
        "email": email,
        "password": password,
        "role": role,
    })
    assert response.status_code == 201, response.text
    return response.json()


async def create_booking(client, token: str, price: float = 2500, cargo_type: str = "general") -> dict:
    response = await client.post(
        "/api/bookings",
        json=booking_payload(price=price, cargo_type=cargo_type),
        headers=auth_header(token)
    )
    assert response.status_code == 201, response.text
    return response.json()["booking"]


def booking_payload(price: float = 2500, cargo_type: str = "general") -> dict:
    return {
        "cargoDetails": {
            "description": "Electronics - 20 boxes",
            "weight": 1200,
            "dimensions": {"length": 120, "width": 80, "height": 100},
            "type": cargo_type,
        },
        "route": {
            "from": "LAX",
            "to": "JFK",
            "departureDate": "2025-03-10T08:00:00Z",
            "arrivalDate": "2025-03-11T14:00:00Z",
        },
        "price": price,
    }
