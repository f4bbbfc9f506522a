from datetime import date

import pytest

from errors import ShopError
from modules.parts_orders.models import (
    bulk_ordered,
    edit_parts_order,
    mark_parts_received,
    new_parts_order,
    order_stats,
    queue_order,
)
from store import PARTS_ORDERS, WORK_ORDERS

WORK_ORDERS_FIXTURE = [
    {"id": "1", "orderNumber": "WO-1001"},
    {"id": "2", "orderNumber": "WO-1002"},
]


def test_received_links_matching_work_order():
    po = {"partNumber": "X", "status": "Received", "workOrderNumber": "WO-1002"}
    updated, matched = mark_parts_received(WORK_ORDERS_FIXTURE, po)
    assert matched == 1
    assert updated[1]["partsReceived"] is True
    assert "partsReceived" not in updated[0]
    assert "partsReceived" not in WORK_ORDERS_FIXTURE[1]


def test_received_without_match_is_a_no_op():
    po = {"partNumber": "X", "status": "Received", "workOrderNumber": "WO-4040"}
    updated, matched = mark_parts_received(WORK_ORDERS_FIXTURE, po)
    assert matched == 0
    assert updated is WORK_ORDERS_FIXTURE


def test_only_received_status_links():
    po = {"partNumber": "X", "status": "Pending", "workOrderNumber": "WO-1001"}
    assert mark_parts_received(WORK_ORDERS_FIXTURE, po) == (WORK_ORDERS_FIXTURE, 0)


def test_new_parts_order_defaults():
    po = new_parts_order({"partNumber": "CPR8EA-9", "quantity": "4"}, today=date(2025, 2, 3))
    assert po["status"] == "To Order"
    assert po["vendor"] == "WPS"
    assert po["quantity"] == 4
    assert po["dateOrdered"] == "2025-02-03"
    assert po["isHighPriority"] is False
    assert "workOrderNumber" not in po
    with pytest.raises(ShopError):
        new_parts_order({"partNumber": "X", "status": "Shipped"})


def test_bulk_ordered_only_touches_vendor_to_order():
    orders = [
        {"id": "a", "vendor": "WPS", "status": "To Order"},
        {"id": "b", "vendor": "WPS", "status": "Backordered"},
        {"id": "c", "vendor": "Parts Unlimited", "status": "To Order"},
    ]
    out = bulk_ordered(orders, "WPS", today=date(2025, 2, 3))
    assert [o["status"] for o in out] == ["Pending", "Backordered", "To Order"]
    assert out[0]["dateOrdered"] == "2025-02-03"


def test_queue_puts_received_last_and_stats():
    orders = [{"id": "a", "status": "Received"}, {"id": "b", "status": "Pending"}, {"id": "c", "status": "To Order"}]
    assert [o["id"] for o in queue_order(orders)] == ["b", "c", "a"]
    assert order_stats(orders) == {"total": 3, "pending": 1, "backordered": 0, "toOrder": 1}


def test_receive_route_sets_parts_received(client, state):
    resp = client.post("/parts-orders/", json={"partNumber": "CPR8EA-9", "vendor": "WPS",
                                               "workOrderNumber": "WO-1001", "isHighPriority": True})
    assert resp.status_code == 201
    po_id = resp.get_json()["item"]["id"]

    resp = client.post(f"/parts-orders/{po_id}/receive")
    assert resp.status_code == 200
    assert state.get(PARTS_ORDERS, po_id)["status"] == "Received"
    assert state.get(WORK_ORDERS, "1")["partsReceived"] is True


def test_status_update_without_match(client, state):
    po_id = client.post("/parts-orders/", json={"partNumber": "X", "workOrderNumber": "WO-7777"}).get_json()["item"]["id"]
    before = list(state.work_orders)
    resp = client.patch(f"/parts-orders/{po_id}", json={"status": "Received"})
    assert resp.status_code == 200
    assert state.work_orders == before


def test_bulk_route(client, state):
    client.post("/parts-orders/", json={"partNumber": "A", "vendor": "WPS"})
    client.post("/parts-orders/", json={"partNumber": "B", "vendor": "OEM Honda"})
    resp = client.post("/parts-orders/bulk-ordered", json={"vendor": "WPS"})
    assert resp.get_json()["stats"] == {"total": 2, "pending": 1, "backordered": 0, "toOrder": 1}
    assert client.post("/parts-orders/bulk-ordered", json={}).status_code == 400


def test_edit_coerces_quantity_and_priority():
    po = new_parts_order({"partNumber": "X", "quantity": 2})
    edited = edit_parts_order(po, {"quantity": "6", "isHighPriority": "false"})
    assert edited["quantity"] == 6
    assert edited["isHighPriority"] is False
    assert edit_parts_order(po, {"quantity": ""})["quantity"] == 2
    assert new_parts_order({"partNumber": "X", "isHighPriority": "on"})["isHighPriority"] is True
    with pytest.raises(ShopError):
        edit_parts_order(po, {"quantity": "lots"})
    with pytest.raises(ShopError):
        edit_parts_order(po, {"quantity": 0})


def test_bad_quantity_edit_keeps_procurement_readable(client, state):
    po_id = client.post("/parts-orders/", json={"partNumber": "CPR8EA-9", "vendor": "WPS",
                                                "quantity": 2}).get_json()["item"]["id"]
    assert client.patch(f"/parts-orders/{po_id}", json={"quantity": "lots"}).status_code == 400
    assert state.get(PARTS_ORDERS, po_id)["quantity"] == 2

    resp = client.get("/vendors/procurement")
    assert resp.status_code == 200
    assert resp.get_json()["items"][0]["total"] == 17.0
