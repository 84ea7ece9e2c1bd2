"""API tests for listing and reading notifications."""

from httpx import AsyncClient

BASE = "/api/v1/notifications"


async def _emit(client: AsyncClient, event_type: str, data: dict) -> None:
    response = await client.post("/api/v1/events", json={"type": event_type, "data": data})
    assert response.status_code == 201


async def test_list_by_query_and_header(client: AsyncClient):
    await _emit(client, "trip.assigned", {"trip_code": "LBJ-01", "guide_id": "guide-1"})

    by_query = (await client.get(BASE, params={"user_id": "guide-1"})).json()
    by_header = (await client.get(BASE, headers={"X-User-Id": "guide-1"})).json()

    assert [n["title"] for n in by_query] == ["Trip Assignment"]
    assert by_query == by_header
    assert by_query[0]["message"] == "Anda telah ditugaskan untuk trip LBJ-01"
    assert by_query[0]["is_read"] is False


async def test_admin_channel_without_user(client: AsyncClient):
    await _emit(client, "package.availability_changed", {"package_id": "pkg-1"})
    await _emit(client, "inventory.low_stock", {"item_name": "Solar", "current_stock": 2, "min_stock": 5})

    rows = (await client.get(BASE)).json()

    assert [n["event_type"] for n in rows] == ["inventory.low_stock"]
    assert rows[0]["user_id"] is None


async def test_mark_read_and_unread_filter(client: AsyncClient):
    await _emit(client, "payment.received", {"booking_code": "B1", "customer_id": "cust-1"})
    await _emit(client, "payment.failed", {"booking_code": "B2", "customer_id": "cust-1"})
    rows = (await client.get(BASE, params={"user_id": "cust-1"})).json()

    response = await client.post(f"{BASE}/{rows[0]['id']}/read")

    assert response.status_code == 200
    assert response.json()["is_read"] is True
    assert response.json()["read_at"] is not None
    unread = (await client.get(BASE, params={"user_id": "cust-1", "unread_only": True})).json()
    assert [n["id"] for n in unread] == [rows[1]["id"]]


async def test_mark_read_unknown(client: AsyncClient):
    response = await client.post(f"{BASE}/missing/read")

    assert response.status_code == 404
    assert response.json()["error_type"] == "NotFoundError"
