"""API tests for event emission and the event audit log."""

from httpx import AsyncClient

from aerotravel.notifications.service import NotificationService

BASE = "/api/v1/events"


async def test_emit_event(client: AsyncClient, session):
    response = await client.post(
        BASE,
        json={"type": "booking.created", "data": {"booking_code": "BK-001", "customer_id": "cust-1"}},
        headers={"X-User-Id": "admin-1"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["type"] == "booking.created"
    assert body["user_id"] == "admin-1"
    assert body["data"]["booking_code"] == "BK-001"

    rows = await NotificationService(session).list_for_user("cust-1")
    assert [row.message for row in rows] == ["Booking baru telah dibuat: BK-001"]


async def test_emit_payload_user_wins_over_header(client: AsyncClient):
    response = await client.post(
        BASE, json={"type": "custom", "user_id": "guide-7"}, headers={"X-User-Id": "admin-1"}
    )

    assert response.json()["user_id"] == "guide-7"


async def test_emit_unknown_type_rejected(client: AsyncClient):
    response = await client.post(BASE, json={"type": "booking.teleported", "data": {}})

    assert response.status_code == 422


async def test_list_events_filtered(client: AsyncClient):
    await client.post(BASE, json={"type": "trip.assigned", "data": {"trip_code": "T1"}, "user_id": "u1"})
    await client.post(BASE, json={"type": "payment.received", "data": {"booking_code": "B1"}, "user_id": "u1"})
    await client.post(BASE, json={"type": "trip.assigned", "data": {"trip_code": "T2"}, "user_id": "u2"})

    all_events = (await client.get(BASE)).json()
    assert len(all_events) == 3

    trips = (await client.get(BASE, params={"type": "trip.assigned"})).json()
    assert sorted(e["data"]["trip_code"] for e in trips) == ["T1", "T2"]

    mine = (await client.get(BASE, params={"user_id": "u1"})).json()
    assert {e["type"] for e in mine} == {"trip.assigned", "payment.received"}

    limited = (await client.get(BASE, params={"limit": 1})).json()
    assert len(limited) == 1


async def test_list_events_invalid_limit(client: AsyncClient):
    response = await client.get(BASE, params={"limit": 0})

    assert response.status_code == 422
