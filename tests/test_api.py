import asyncio

import pytest
from conftest import DAY, add_booking

from app.core.config import settings
from app.models.booking import TimeSlot
from app.services import recommendation_service
from app.services.auth_service import create_admin

ADMIN_PASSWORD = "correct horse battery"


@pytest.fixture
async def admin_headers(session, client):
    await create_admin(session, "admin", ADMIN_PASSWORD)
    await session.commit()
    resp = await client.post("/api/v1/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def _booking_body(screen_id: int, slot: str = "5th period class", **overrides) -> dict:
    body = {
        "screen_id": screen_id,
        "date": DAY.isoformat(),
        "time_slot": slot,
        "user_name": "Jane Doe",
        "user_contact_number": "555-000-1234",
    }
    body.update(overrides)
    return body


async def test_health(client):
    resp = await client.get("/health")
    assert resp.json() == {"status": "ok"}


async def test_time_slots(client):
    resp = await client.get("/api/v1/slots")
    assert resp.json() == ["4th period class", "5th period class", "7th period class"]


async def test_booking_flow(client, screens):
    a = screens[0]
    resp = await client.post("/api/v1/bookings", json=_booking_body(a.id))
    assert resp.status_code == 201
    booking_id = resp.json()["booking_id"]

    resp = await client.get(f"/api/v1/bookings/{booking_id}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["time_slot"] == "5th period class"
    assert body["date"].startswith("2025-03-10")
    assert body["screen"]["name"] == "Screen A"

    resp = await client.post("/api/v1/bookings", json=_booking_body(a.id, user_name="Late Comer"))
    assert resp.status_code == 409
    assert resp.json()["detail"] == "This time slot is already booked. Please select another."

    resp = await client.get("/api/v1/slots/booked", params={"screen_id": a.id, "date": "2025-03-10"})
    assert resp.json()["booked"] == ["5th period class"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"time_slot": "lunch"},
        {"user_name": "J"},
        {"user_contact_number": "123"},
        {"date": "not-a-date"},
        {"user_name": "        "},
        {"user_name": " J "},
        {"user_contact_number": "   1   "},
    ],
)
async def test_invalid_booking_is_rejected(client, screens, overrides):
    resp = await client.post("/api/v1/bookings", json=_booking_body(screens[0].id, **overrides))
    assert resp.status_code == 422


async def test_booking_unknown_screen_is_404(client, screens):
    resp = await client.post("/api/v1/bookings", json=_booking_body(9999))
    assert resp.status_code == 404


async def test_demand_check_scenario(client, session, screens):
    a = screens[0]
    await add_booking(session, a.id, DAY, TimeSlot.FOURTH_PERIOD)
    await add_booking(session, a.id, DAY, TimeSlot.FIFTH_PERIOD)
    selection = {"screen_id": a.id, "date": "2025-03-10", "time_slot": "7th period class"}

    resp = await client.post("/api/v1/demand/check", json=selection)
    assert resp.json() == {"level": "medium", "message": "This screen has multiple bookings today."}

    resp = await client.post("/api/v1/demand/recommendations", json=selection)
    body = resp.json()
    assert body["demand"]["level"] == "medium"
    assert body["recommendationsAvailable"] is True
    assert body["recommendations"]["alternativeTimeSlots"] == []
    assert body["recommendations"]["nearbyScreenRecommendations"] == [screens[1].id, screens[2].id]


async def test_low_demand_has_no_recommendations(client, screens):
    selection = {"screen_id": screens[0].id, "date": "2025-03-10", "time_slot": "4th period class"}
    resp = await client.post("/api/v1/demand/recommendations", json=selection)
    body = resp.json()
    assert body["demand"] == {"level": "low", "message": None}
    assert body["recommendations"] is None


async def test_admin_routes_require_session(client, screens):
    assert (await client.get("/api/v1/bookings")).status_code == 401
    assert (await client.delete(f"/api/v1/screens/{screens[0].id}")).status_code == 401
    resp = await client.get("/api/v1/bookings", headers={"Authorization": "Bearer nonsense"})
    assert resp.status_code == 401


async def test_login_rejects_bad_password(client, session):
    await create_admin(session, "admin", ADMIN_PASSWORD)
    await session.commit()
    resp = await client.post("/api/v1/auth/login", json={"username": "admin", "password": "wrong"})
    assert resp.status_code == 401


async def test_login_cookie_grants_admin_session(client, session):
    await create_admin(session, "admin", ADMIN_PASSWORD)
    await session.commit()
    resp = await client.post("/api/v1/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert settings.admin_cookie_name in resp.cookies
    resp = await client.get("/api/v1/auth/me")
    assert resp.json()["username"] == "admin"


async def test_admin_manages_bookings_and_screens(client, session, screens, admin_headers):
    a, b = screens[0], screens[1]
    booking = await add_booking(session, a.id, DAY, TimeSlot.FOURTH_PERIOD)

    resp = await client.get("/api/v1/bookings", headers=admin_headers)
    assert [row["id"] for row in resp.json()] == [booking.id]

    resp = await client.delete(f"/api/v1/screens/{a.id}", headers=admin_headers)
    assert resp.status_code == 409
    assert "existing bookings" in resp.json()["detail"]

    resp = await client.delete(f"/api/v1/bookings/{booking.id}", headers=admin_headers)
    assert resp.status_code == 204
    resp = await client.delete(f"/api/v1/bookings/{booking.id}", headers=admin_headers)
    assert resp.status_code == 404

    resp = await client.delete(f"/api/v1/screens/{a.id}", headers=admin_headers)
    assert resp.status_code == 204

    resp = await client.post(
        "/api/v1/screens",
        json={"name": "Gym Display", "location": "Gym Lobby", "specs": '50" LED', "image_url": ""},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    assert resp.json()["image_url"] is None

    resp = await client.post(
        "/api/v1/screens",
        json={"name": "Bad Image", "location": "Gym Lobby", "specs": '50" LED', "image_url": "not a url"},
        headers=admin_headers,
    )
    assert resp.status_code == 422

    resp = await client.put(f"/api/v1/screens/{b.id}", json={"location": "Library, 2nd Floor"}, headers=admin_headers)
    assert resp.json()["location"] == "Library, 2nd Floor"
    assert resp.json()["name"] == "Screen B"


async def test_padded_names_are_stored_trimmed(client, screens):
    body = _booking_body(screens[0].id, user_name="  Jane Doe  ", user_contact_number=" 555-000-1234 ")
    resp = await client.post("/api/v1/bookings", json=body)
    assert resp.status_code == 201
    resp = await client.get(f"/api/v1/bookings/{resp.json()['booking_id']}")
    assert resp.json()["user_name"] == "Jane Doe"
    assert resp.json()["user_contact_number"] == "555-000-1234"


class _FailingGenerator:
    def __init__(self, error: Exception):
        self.error = error

    async def generate(self, request):
        raise self.error


class _SlowGenerator:
    async def generate(self, request):
        await asyncio.sleep(1.0)


@pytest.mark.parametrize("generator", [_FailingGenerator(ConnectionError("unreachable")), _SlowGenerator()])
async def test_recommendations_unavailable_lets_user_proceed(client, session, screens, monkeypatch, generator):
    monkeypatch.setattr(recommendation_service, "build_suggestion_generator", lambda s: generator)
    monkeypatch.setattr(settings, "recommendation_timeout_seconds", 0.05)
    await add_booking(session, screens[0].id, DAY, TimeSlot.FOURTH_PERIOD)

    selection = {"screen_id": screens[0].id, "date": "2025-03-10", "time_slot": "4th period class"}
    resp = await client.post("/api/v1/demand/recommendations", json=selection)
    assert resp.status_code == 200
    body = resp.json()
    assert body["demand"]["level"] == "high"
    assert body["recommendations"] is None
    assert body["recommendationsAvailable"] is False

    resp = await client.post("/api/v1/bookings", json=_booking_body(screens[0].id, slot="5th period class"))
    assert resp.status_code == 201
