"""
Receipt API tests - totals, filters, backdating and ownership of referenced locations.
"""

import pytest
from httpx import AsyncClient


async def _location(client: AsyncClient, name: str = "Shop") -> str:
    await client.post("/locations", json={"name": name, "address": "Main St"})
    return next(loc["id"] for loc in (await client.get("/locations")).json() if loc["name"] == name)


async def _receipts(client: AsyncClient, **params) -> list[dict]:
    response = await client.get("/receipts", params=params)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.asyncio
async def test_new_receipt_totals_zero(alice: AsyncClient):
    location_id = await _location(alice)
    assert (await alice.post("/receipts", json={"locationId": location_id})).status_code == 200

    receipts = await _receipts(alice)
    assert len(receipts) == 1
    receipt = receipts[0]
    assert receipt["totalPrice"] == 0
    assert receipt["createdBy"] == alice.user["id"]
    assert receipt["location"]["id"] == location_id
    assert receipt["location"]["name"] == "Shop"


@pytest.mark.asyncio
async def test_total_is_sum_of_price_times_amount(alice: AsyncClient):
    location_id = await _location(alice)
    await alice.post("/items", json={"name": "Milk", "price": 2.5, "unit": "l"})
    await alice.post("/items", json={"name": "Egg", "price": 0.1, "unit": "pcs"})
    items = {i["name"]: i["id"] for i in (await alice.get("/items")).json()}
    await alice.post("/receipts", json={"locationId": location_id})
    receipt_id = (await _receipts(alice))[0]["id"]

    await alice.post("/items/inreceipt", json={"receiptId": receipt_id, "itemId": items["Milk"], "amount": 3})
    await alice.post("/items/inreceipt", json={"receiptId": receipt_id, "itemId": items["Egg"], "amount": 3})

    # 7.5 + 0.30000000000000004 rounded to cents
    assert (await _receipts(alice))[0]["totalPrice"] == 7.8


@pytest.mark.asyncio
async def test_filters(alice: AsyncClient):
    shop = await _location(alice, "Shop")
    market = await _location(alice, "Market")
    await alice.post("/receipts", json={"locationId": shop})
    await alice.post("/receipts", json={"locationId": market})
    await alice.post("/receipts", json={"locationId": market})

    assert len(await _receipts(alice)) == 3
    at_market = await _receipts(alice, locationId=market)
    assert len(at_market) == 2
    assert {r["location"]["id"] for r in at_market} == {market}

    one = await _receipts(alice, id=at_market[0]["id"])
    assert [r["id"] for r in one] == [at_market[0]["id"]]


@pytest.mark.asyncio
async def test_both_filters_rejected(alice: AsyncClient):
    response = await alice.get("/receipts", params={"id": "abc", "locationId": "def"})
    assert response.status_code == 400
    assert "either id or locationId" in response.json()["detail"]


@pytest.mark.asyncio
async def test_created_at_override(alice: AsyncClient):
    location_id = await _location(alice)
    response = await alice.post(
        "/receipts", json={"locationId": location_id, "createdAt": "2024-01-15T10:30:00Z"}
    )
    assert response.status_code == 200
    receipt = (await _receipts(alice))[0]
    assert receipt["createdAt"].startswith("2024-01-15T10:30:00")
    assert receipt["updatedAt"] == receipt["createdAt"]


@pytest.mark.asyncio
async def test_foreign_location_not_found(alice: AsyncClient, bob: AsyncClient):
    bobs_location = await _location(bob, "Bob's shop")
    response = await alice.post("/receipts", json={"locationId": bobs_location})
    assert response.status_code == 404
    assert await _receipts(alice) == []


@pytest.mark.asyncio
async def test_move_receipt_to_other_location(alice: AsyncClient):
    shop = await _location(alice, "Shop")
    market = await _location(alice, "Market")
    await alice.post("/receipts", json={"locationId": shop})
    receipt_id = (await _receipts(alice))[0]["id"]

    assert (await alice.put("/receipts", json={"id": receipt_id, "locationId": market})).status_code == 200
    assert (await _receipts(alice))[0]["location"]["id"] == market


@pytest.mark.asyncio
async def test_cross_user_isolation(alice: AsyncClient, bob: AsyncClient):
    location_id = await _location(alice)
    await alice.post("/receipts", json={"locationId": location_id})
    receipt_id = (await _receipts(alice))[0]["id"]

    assert await _receipts(bob) == []
    assert await _receipts(bob, id=receipt_id) == []
    assert (await bob.put("/receipts", json={"id": receipt_id})).status_code == 403
    assert (await bob.request("DELETE", "/receipts", json={"id": receipt_id})).status_code == 403
    assert len(await _receipts(alice)) == 1


@pytest.mark.asyncio
async def test_delete_receipt(alice: AsyncClient):
    location_id = await _location(alice)
    await alice.post("/receipts", json={"locationId": location_id})
    receipt_id = (await _receipts(alice))[0]["id"]
    assert (await alice.request("DELETE", "/receipts", json={"id": receipt_id})).status_code == 200
    assert await _receipts(alice) == []
