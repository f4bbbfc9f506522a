from datetime import date

import pytest

from errors import ShopError
from modules.customers.models import find_or_create_customer, new_customer, search_customers, start_work_order

VEHICLE = {"year": "2024", "make": "Yamaha", "model": "YZ250F", "vin": "YZ250-8839210", "type": "Bike"}


def test_find_or_create_without_id_synthesizes_customer():
    target, customers = find_or_create_customer([], None, None, None, VEHICLE, today=date(2025, 1, 2))
    assert len(customers) == 1
    assert customers[0]["id"] == target
    assert target.startswith("c-")
    assert customers[0]["name"] == "Unknown"
    assert customers[0]["fleet"] == [VEHICLE]


def test_find_or_create_leaves_other_customers_alone():
    others = [{"id": "c9", "name": "Other", "fleet": [], "lastVisit": "2020-01-01"}]
    target, customers = find_or_create_customer(others, "c1", "x", "y", VEHICLE)
    assert target == "c1"
    assert customers == others


def test_new_customer_defaults():
    c = new_customer({"name": "Lee"})
    assert c["lastVisit"] == "New"
    assert c["fleet"] == []
    assert c["preferredContact"] == "Call"
    with pytest.raises(ShopError):
        new_customer({"name": ""})
    with pytest.raises(ShopError):
        new_customer({"name": "Lee", "preferredContact": "Fax"})


def test_search_and_start_work_order():
    customers = [new_customer({"name": "Brad Peterson", "phone": "555-123"}), new_customer({"name": "Sarah"})]
    assert [c["name"] for c in search_customers(customers, "brad")] == ["Brad Peterson"]
    assert [c["name"] for c in search_customers(customers, "555")] == ["Brad Peterson"]
    payload = start_work_order(customers[0])
    assert payload == {"customerName": "Brad Peterson", "phone": "555-123", "customerId": customers[0]["id"]}


def test_customer_routes(client, state):
    resp = client.post("/customers/", json={"name": "Lee Park", "phone": "555-222"})
    assert resp.status_code == 201
    cid = resp.get_json()["item"]["id"]
    assert len(state.customers) == 3

    resp = client.patch(f"/customers/{cid}", json={"email": "lee@example.com"})
    assert resp.get_json()["item"]["email"] == "lee@example.com"
    assert resp.get_json()["item"]["lastVisit"] == "New"

    data = client.get("/customers/c1").get_json()
    assert [wo["orderNumber"] for wo in data["workOrders"]] == ["WO-1001"]

    prepopulated = client.post("/customers/c1/start-work-order").get_json()["prepopulated"]
    assert prepopulated["customerId"] == "c1"

    assert client.get("/customers/?q=lee").get_json()["count"] == 1
