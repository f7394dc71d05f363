"""
BDD step definitions for receipt totals: register -> login -> location -> receipt -> lines -> total.
"""

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("receipts.feature")

PASSWORD = "password123"


@pytest.fixture
def context():
    return {}


def _sign_in(client, email):
    client.cookies.clear()
    client.post("/auth/register", json={"email": email, "password": PASSWORD})
    r = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert r.status_code == 200, r.text


@given(parsers.parse('I am signed in as "{email}"'))
def signed_in(sync_client, email):
    _sign_in(sync_client, email)


@when(parsers.parse('I sign in as "{email}"'))
def sign_in_again(sync_client, email):
    _sign_in(sync_client, email)


@given(parsers.parse('I have a location named "{name}"'))
def location(sync_client, context, name):
    assert sync_client.post("/locations", json={"name": name, "address": "Main St"}).status_code == 200
    context.setdefault("locations", {})[name] = sync_client.get("/locations", params={"name": name}).json()[0]["id"]


@given(parsers.parse('I have an item "{name}" priced {price:g} per "{unit}"'))
def item(sync_client, context, name, price, unit):
    assert sync_client.post("/items", json={"name": name, "price": price, "unit": unit}).status_code == 200
    context.setdefault("items", {})[name] = sync_client.get("/items", params={"name": name}).json()[0]["id"]


@when(parsers.parse('I create a receipt at "{name}"'))
def create_receipt(sync_client, context, name):
    location_id = context["locations"][name]
    assert sync_client.post("/receipts", json={"locationId": location_id}).status_code == 200
    context["receipt"] = sync_client.get("/receipts", params={"locationId": location_id}).json()[-1]["id"]


@when(parsers.parse('I add {amount:g} of "{name}" to the receipt'))
def add_line(sync_client, context, amount, name):
    r = sync_client.post(
        "/items/inreceipt",
        json={"receiptId": context["receipt"], "itemId": context["items"][name], "amount": amount},
    )
    assert r.status_code == 200, r.text


@then(parsers.parse("the receipt total should be {total:g}"))
def receipt_total(sync_client, context, total):
    receipts = sync_client.get("/receipts", params={"id": context["receipt"]}).json()
    assert receipts[0]["totalPrice"] == total


@then("I should see no receipts")
def no_receipts(sync_client):
    assert sync_client.get("/receipts").json() == []
