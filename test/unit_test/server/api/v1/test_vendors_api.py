"""API tests for vendors and the vendor price lock."""

import pytest
from httpx import AsyncClient

BASE = "/api/v1/vendors"
SUPER_ADMIN = {"X-User-Role": "super_admin", "X-User-Id": "owner-1"}


@pytest.fixture
async def vendor(client: AsyncClient) -> dict:
    response = await client.post(
        BASE,
        json={"branch_id": "lbj", "name": "Pinisi Bahari", "vendor_type": "boat_rental", "default_price": 3500000},
    )
    assert response.status_code == 201
    return response.json()


async def test_create_vendor(vendor):
    assert vendor["default_price"] == 3500000
    assert vendor["vendor_type"] == "boat_rental"
    assert vendor["is_active"] is True


@pytest.mark.parametrize(
    "payload",
    [
        {"branch_id": "lbj", "name": "  ", "default_price": 100},
        {"branch_id": "lbj", "name": "Katering", "default_price": 0},
    ],
)
async def test_create_vendor_rejected(client: AsyncClient, payload):
    response = await client.post(BASE, json=payload)

    assert response.status_code == 422
    assert response.json()["error_type"] == "InvalidOperationError"


async def test_list_filters(client: AsyncClient, vendor):
    await client.post(BASE, json={"branch_id": "lbj", "name": "Katering Bunda", "vendor_type": "catering", "default_price": 50000})
    await client.post(BASE, json={"branch_id": "rja", "name": "Pinisi Raja", "vendor_type": "boat_rental", "default_price": 1})

    names = lambda resp: [v["name"] for v in resp.json()]  # noqa: E731
    assert names(await client.get(BASE, params={"branch_id": "lbj"})) == ["Katering Bunda", "Pinisi Bahari"]
    assert names(await client.get(BASE, params={"vendor_type": "boat_rental"})) == ["Pinisi Bahari", "Pinisi Raja"]
    assert names(await client.get(BASE, params={"search": "pinisi", "branch_id": "rja"})) == ["Pinisi Raja"]


async def test_update_details(client: AsyncClient, vendor):
    response = await client.patch(f"{BASE}/{vendor['id']}", json={"phone": "0812-1111", "is_active": False})

    assert response.status_code == 200
    assert response.json()["phone"] == "0812-1111"
    assert response.json()["default_price"] == 3500000
    assert (await client.get(BASE)).json() == []
    assert len((await client.get(BASE, params={"include_inactive": True})).json()) == 1


async def test_update_details_cannot_touch_price(client: AsyncClient, vendor):
    response = await client.patch(f"{BASE}/{vendor['id']}", json={"default_price": 1})

    assert response.status_code == 422
    assert (await client.get(f"{BASE}/{vendor['id']}")).json()["default_price"] == 3500000


async def test_update_details_rejects_null_required_fields(client: AsyncClient, vendor):
    for field in ("vendor_type", "price_unit", "is_active"):
        response = await client.patch(f"{BASE}/{vendor['id']}", json={field: None})

        assert response.status_code == 422
        assert response.json()["error_type"] == "InvalidOperationError"

    detail = (await client.get(f"{BASE}/{vendor['id']}")).json()
    assert detail["vendor_type"] == "boat_rental"
    assert detail["is_active"] is True


async def test_price_change_requires_super_admin(client: AsyncClient, vendor):
    for headers in ({}, {"X-User-Role": "branch_manager"}, {"X-User-Role": "Super_Admin"}):
        response = await client.patch(
            f"{BASE}/{vendor['id']}/price", json={"new_price": 4000000, "reason": "BBM naik"}, headers=headers
        )
        assert response.status_code == 403
        assert response.json()["error_type"] == "PriceLockError"

    detail = (await client.get(f"{BASE}/{vendor['id']}")).json()
    assert detail["default_price"] == 3500000
    assert detail["price_history"] == []


async def test_price_change_records_history_and_notifies(client: AsyncClient, vendor):
    response = await client.patch(
        f"{BASE}/{vendor['id']}/price", json={"new_price": 4000000, "reason": " BBM naik "}, headers=SUPER_ADMIN
    )

    assert response.status_code == 200
    assert response.json()["default_price"] == 4000000

    detail = (await client.get(f"{BASE}/{vendor['id']}")).json()
    history, = detail["price_history"]
    assert history["old_price"] == 3500000
    assert history["new_price"] == 4000000
    assert history["reason"] == "BBM naik"
    assert history["changed_by"] == "owner-1"

    admin = (await client.get("/api/v1/notifications")).json()
    assert [n["title"] for n in admin] == ["Harga Vendor Berubah"]


@pytest.mark.parametrize("payload", [{"new_price": 0, "reason": "x"}, {"new_price": 10, "reason": "  "}])
async def test_price_change_validation(client: AsyncClient, vendor, payload):
    response = await client.patch(f"{BASE}/{vendor['id']}/price", json=payload, headers=SUPER_ADMIN)

    assert response.status_code == 422


async def test_price_change_unknown_vendor(client: AsyncClient):
    response = await client.patch(f"{BASE}/missing/price", json={"new_price": 10, "reason": "x"}, headers=SUPER_ADMIN)

    assert response.status_code == 404


async def test_soft_delete(client: AsyncClient, vendor):
    response = await client.delete(f"{BASE}/{vendor['id']}")

    assert response.status_code == 204
    assert (await client.get(BASE, params={"include_inactive": True})).json() == []
    assert (await client.get(f"{BASE}/{vendor['id']}")).status_code == 404
    assert (await client.delete(f"{BASE}/{vendor['id']}")).status_code == 404
