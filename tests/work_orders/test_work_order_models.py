"""Intake, totals and line-item operations on work order records."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from errors import ConfirmationRequired, ShopError
from modules.work_orders.models import (
    add_labor,
    add_manual_part,
    add_note,
    add_part_from_inventory,
    create_order,
    edit_order,
    generate_order_number,
    labor_total,
    order_total,
    punch_in,
    punch_out,
    set_status,
    timed_hours,
    update_inspection,
    update_labor_entry,
    update_part,
)

INTAKE = {
    "customerName": "Dana Ruiz",
    "phone": "555-000-1111",
    "customerConcern": "Won't idle when cold",
    "year": "2022",
    "make": "Sea-Doo",
    "model": "Spark",
    "vin": "SDX12345",
    "vehicleType": "PWC",
}

EXISTING = [{
    "id": "c1", "name": "Brad Peterson", "phone": "555-123-4567", "email": "", "address": "",
    "preferredContact": "Text", "lastVisit": "2024-05-15",
    "fleet": [{"year": "2023", "make": "Honda", "model": "TRX450R", "vin": "1HFSC57008A000001", "type": "ATV"}],
}]


def test_order_numbers_follow_the_count():
    assert generate_order_number(0) == "WO-1001"
    assert generate_order_number(1) == "WO-1002"


def test_sequential_intake_numbers():
    orders, customers = [], []
    numbers = []
    for _ in range(3):
        order, orders, customers = create_order(orders, customers, INTAKE)
        numbers.append(order["orderNumber"])
    assert numbers == ["WO-1001", "WO-1002", "WO-1003"]
    assert orders[0]["orderNumber"] == "WO-1003"


def test_unknown_customer_gets_exactly_one_record_with_one_vehicle():
    order, orders, customers = create_order([], EXISTING, INTAKE, today=date(2025, 3, 1))
    assert len(customers) == 2
    new = customers[-1]
    assert new["id"] == order["customerId"]
    assert new["name"] == "Dana Ruiz"
    assert new["lastVisit"] == "2025-03-01"
    assert new["fleet"] == [{"year": "2022", "make": "Sea-Doo", "model": "Spark", "vin": "SDX12345", "type": "PWC"}]
    assert EXISTING[0]["fleet"][0]["vin"] == "1HFSC57008A000001"


def test_known_vin_is_not_duplicated_case_insensitive():
    data = {**INTAKE, "customerId": "c1", "vin": "1hfsc57008a000001"}
    order, _, customers = create_order([], EXISTING, data, today=date(2025, 3, 1))
    assert order["customerId"] == "c1"
    assert len(customers) == 1
    assert len(customers[0]["fleet"]) == 1
    assert customers[0]["lastVisit"] == "2025-03-01"


def test_new_vin_appends_one_fleet_entry():
    data = {**INTAKE, "customerId": "c1"}
    _, _, customers = create_order([], EXISTING, data)
    assert [v["vin"] for v in customers[0]["fleet"]] == ["1HFSC57008A000001", "SDX12345"]
    assert len(EXISTING[0]["fleet"]) == 1


def test_new_order_defaults():
    order, _, _ = create_order([], [], INTAKE)
    assert order["status"] == "New"
    assert order["notes"] == [] and order["parts"] == [] and order["laborEntries"] == [] and order["images"] == []
    assert set(order["inspection"].values()) == {"unchecked"}


@pytest.mark.parametrize("missing", ["customerName", "customerConcern"])
def test_required_fields(missing):
    with pytest.raises(ShopError):
        create_order([], [], {**INTAKE, missing: "  "})


def test_total_matches_example():
    order = {
        "parts": [{"price": 8.50, "quantity": 1}],
        "laborEntries": [{"hours": 0.5, "rate": 125}],
    }
    assert order_total(order) == Decimal("71.00")


def test_total_is_exact_for_cents():
    order = {
        "parts": [{"price": 0.1, "quantity": 3}, {"price": 19.99, "quantity": 2}],
        "laborEntries": [{"hours": 1.1, "rate": 0.3}],
    }
    assert order_total(order) == Decimal("40.61")


def test_empty_order_total_is_zero():
    assert order_total({}) == 0


def test_any_status_can_be_selected():
    order = {"orderNumber": "WO-1001", "status": "Ready"}
    assert set_status(order, "New")["status"] == "New"
    assert set_status(order, "Parts Ordered")["status"] == "Parts Ordered"


def test_picked_up_needs_confirmation():
    order = {"orderNumber": "WO-1001", "status": "Ready"}
    with pytest.raises(ConfirmationRequired):
        set_status(order, "Picked Up")
    assert set_status(order, "Picked Up", confirm=True)["status"] == "Picked Up"
    assert order["status"] == "Ready"


def test_unknown_status_rejected():
    with pytest.raises(ShopError):
        set_status({"orderNumber": "WO-1", "status": "New"}, "Lost")


def test_notes_newest_first_and_blank_rejected():
    order = add_note({"notes": []}, "first")
    order = add_note(order, "second", author="Kim")
    assert [n["content"] for n in order["notes"]] == ["second", "first"]
    assert order["notes"][0]["author"] == "Kim"
    assert order["notes"][1]["author"] == "Shop Mechanic"
    with pytest.raises(ShopError):
        add_note(order, "   ")


def test_parts_from_inventory_and_manual():
    item = {"partNumber": "CPR8EA-9", "description": "NGK Spark Plug", "unitPrice": 8.5}
    order = add_part_from_inventory({"parts": []}, item)
    order = add_manual_part(order)
    assert [(p["partNumber"], p["price"], p["quantity"]) for p in order["parts"]] == [
        ("CPR8EA-9", 8.5, 1), ("NEW-PART", 0, 1)
    ]
    order = update_part(order, order["parts"][1]["id"], {"price": 12.0, "quantity": 2})
    assert order_total(order) == Decimal("32.5")
    with pytest.raises(ShopError):
        update_part(order, order["parts"][0]["id"], {"id": "hijack"})


def test_labor_entries():
    order = add_labor({"laborEntries": []}, 125)
    entry = order["laborEntries"][0]
    assert (entry["hours"], entry["rate"], entry["description"]) == (1.0, 125, "Manual Entry")
    order = update_labor_entry(order, entry["id"], {"hours": 2.5})
    assert order_total(order) == Decimal("312.5")


def test_timed_hours_rounding_and_floor():
    start = datetime(2025, 1, 6, 9, 0, 0)
    assert timed_hours(start, datetime(2025, 1, 6, 10, 30, 0)) == 1.5
    assert timed_hours(start, datetime(2025, 1, 6, 9, 0, 5)) == 0.01


def test_punch_clock_logs_labor():
    order = {"orderNumber": "WO-1001", "laborEntries": []}
    order = punch_in(order, now=datetime(2025, 1, 6, 9, 0))
    with pytest.raises(ShopError):
        punch_in(order)
    order = punch_out(order, 125, now=datetime(2025, 1, 6, 9, 45))
    assert "punchedInAt" not in order
    assert order["laborEntries"][0]["hours"] == 0.75
    assert order["laborEntries"][0]["description"] == "Timed Labor Session"
    with pytest.raises(ShopError):
        punch_out(order, 125)


def test_inspection_results():
    order = update_inspection({}, {"Brakes": "ok", "Tires": "attention"})
    assert order["inspection"]["Brakes"] == "ok"
    assert order["inspection"]["Lights"] == "unchecked"
    with pytest.raises(ShopError):
        update_inspection(order, {"Brakes": "maybe"})


def test_line_edits_coerce_form_strings():
    order = add_manual_part({"parts": [], "laborEntries": []}, price=10.0)
    part_id = order["parts"][0]["id"]
    order = update_part(order, part_id, {"price": "12,50", "quantity": "3"})
    assert (order["parts"][0]["price"], order["parts"][0]["quantity"]) == (12.5, 3)

    order = add_labor(order, 125)
    entry_id = order["laborEntries"][0]["id"]
    order = update_labor_entry(order, entry_id, {"hours": "3", "rate": "100"})
    assert (order["laborEntries"][0]["hours"], order["laborEntries"][0]["rate"]) == (3.0, 100.0)
    assert labor_total(order) == Decimal("300")
    assert order_total(order) == Decimal("337.5")


@pytest.mark.parametrize(
    "kind, changes",
    [
        ("part", {"price": "abc"}),
        ("part", {"price": ""}),
        ("part", {"quantity": "lots"}),
        ("part", {"quantity": -1}),
        ("labor", {"hours": "NaN"}),
        ("labor", {"rate": "-5"}),
        ("labor", {"hours": True}),
    ],
)
def test_line_edits_reject_bad_numbers(kind, changes):
    order = add_labor(add_manual_part({"parts": [], "laborEntries": []}), 125)
    with pytest.raises(ShopError):
        if kind == "part":
            update_part(order, order["parts"][0]["id"], changes)
        else:
            update_labor_entry(order, order["laborEntries"][0]["id"], changes)


def test_edit_order_coerces_lines_and_keeps_read_only_fields():
    order = add_labor({"id": "1", "orderNumber": "WO-1001", "status": "New", "parts": [], "laborEntries": []}, 125)
    entry = order["laborEntries"][0]
    edited = edit_order(order, {"orderNumber": "WO-9", "laborEntries": [{**entry, "hours": "2"}]})
    assert edited["orderNumber"] == "WO-1001"
    assert edited["laborEntries"][0]["hours"] == 2.0
    with pytest.raises(ShopError):
        edit_order(order, {"parts": [{"id": "x", "price": "oops", "quantity": 1}]})
    with pytest.raises(ShopError):
        edit_order(order, {"parts": "none"})
    with pytest.raises(ConfirmationRequired):
        edit_order(order, {"status": "Picked Up"})
    assert edit_order(order, {"status": "Picked Up"}, confirm=True)["status"] == "Picked Up"
