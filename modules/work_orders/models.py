"""Work orders: intake, status, notes, parts, labor and totals.

Records are plain dicts shaped exactly like the persisted JSON. Every
operation here returns a new record (or a new list) and leaves its input
untouched; the routes write the result back through the shop state.
"""
import enum
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from errors import ConfirmationRequired, ShopError
from modules.customers.models import find_or_create_customer
from utils import money, new_id, now_iso, parse_amount, parse_int


class WorkOrderStatus(str, enum.Enum):
    NEW = "New"
    DIAGNOSING = "Diagnosing"
    QUOTED = "Quoted"
    PARTS_ORDERED = "Parts Ordered"
    IN_PROGRESS = "In Progress"
    READY = "Ready"
    PICKED_UP = "Picked Up"


class VehicleType(str, enum.Enum):
    ATV = "ATV"
    PWC = "PWC"
    SLED = "Sled"
    BIKE = "Bike"


STATUS_SEQUENCE = [s.value for s in WorkOrderStatus]
VEHICLE_TYPES = [t.value for t in VehicleType]

# Off the shop floor: finished or already handed back
CLOSED_STATUSES = {WorkOrderStatus.READY.value, WorkOrderStatus.PICKED_UP.value}
TRIAGE_STATUSES = {WorkOrderStatus.NEW.value, WorkOrderStatus.DIAGNOSING.value}

INSPECTION_ITEMS = ["Brakes", "Tires", "Lights", "Fluids", "Chain / Belt", "Battery", "Controls"]
INSPECTION_RESULTS = ["unchecked", "ok", "attention"]

DEFAULT_AUTHOR = "Shop Mechanic"
# id and number are assigned at intake
READ_ONLY_FIELDS = {"id", "orderNumber", "createdAt"}
MIN_TIMED_HOURS = 0.01


def generate_order_number(current_count: int) -> str:
    """``WO-{1000 + count + 1}``. Numbers repeat once orders get deleted."""
    return f"WO-{1000 + current_count + 1}"


def default_inspection() -> dict:
    return {item: "unchecked" for item in INSPECTION_ITEMS}


def vehicle_from(data: dict) -> dict:
    vtype = data.get("vehicleType") or VehicleType.BIKE.value
    if vtype not in VEHICLE_TYPES:
        raise ShopError(f"vehicleType must be one of {VEHICLE_TYPES}")
    return {
        "year": str(data.get("year") or ""),
        "make": data.get("make") or "",
        "model": data.get("model") or "",
        "vin": data.get("vin") or "",
        "type": vtype,
    }


def new_work_order(data: dict, order_number: str, customer_id: str) -> dict:
    vehicle = vehicle_from(data)
    return {
        "id": new_id(),
        "orderNumber": order_number,
        "customerId": customer_id,
        "customerName": data.get("customerName") or "",
        "phone": data.get("phone") or "",
        "vin": vehicle["vin"],
        "year": vehicle["year"],
        "make": vehicle["make"],
        "model": vehicle["model"],
        "vehicleType": vehicle["type"],
        "customerConcern": data.get("customerConcern") or "",
        "status": data.get("status") or WorkOrderStatus.NEW.value,
        "notes": [],
        "parts": [],
        "laborEntries": [],
        "images": [],
        "inspection": default_inspection(),
        "createdAt": now_iso(),
    }


def create_order(work_orders: list, customers: list, data: dict, today: Optional[date] = None):
    """Intake a new order.

    Returns ``(order, updated_work_orders, updated_customers)``; the new order
    goes to the front of the list.
    """
    for field in ("customerName", "customerConcern"):
        if not (data.get(field) or "").strip():
            raise ShopError(f"{field} is required.")
    if data.get("status") and data["status"] not in STATUS_SEQUENCE:
        raise ShopError(f"Unknown status {data['status']!r}")

    vehicle = vehicle_from(data)
    customer_id, customers = find_or_create_customer(
        customers,
        data.get("customerId"),
        data.get("customerName"),
        data.get("phone"),
        vehicle,
        today=today,
    )
    order = new_work_order(data, generate_order_number(len(work_orders)), customer_id)
    return order, [order, *work_orders], customers


def set_status(order: dict, status: str, confirm: bool = False) -> dict:
    """Any status can be chosen at any time; handing the unit back must be confirmed."""
    if status not in STATUS_SEQUENCE:
        raise ShopError(f"Unknown status {status!r}")
    if status == WorkOrderStatus.PICKED_UP.value and not confirm and order.get("status") != status:
        raise ConfirmationRequired(f"Confirm that {order['orderNumber']} was picked up by the customer.")
    return {**order, "status": status}


def edit_order(order: dict, changes: dict, confirm: bool = False) -> dict:
    """Whole-record edit; read-only fields are ignored, line items are coerced like single edits."""
    changes = {k: v for k, v in changes.items() if k not in READ_ONLY_FIELDS}
    if "status" in changes:
        order = set_status(order, changes.pop("status"), confirm=confirm)
    for key in ("parts", "laborEntries"):
        if key in changes:
            lines = changes[key]
            if not isinstance(lines, list) or not all(isinstance(line, dict) for line in lines):
                raise ShopError(f"{key} must be a list of objects")
            changes[key] = [{**line, **_coerce_line(line)} for line in lines]
    return {**order, **changes}


def is_active(order: dict) -> bool:
    return order.get("status") not in CLOSED_STATUSES


# ---------- notes ----------
def add_note(order: dict, content: str, author: Optional[str] = None) -> dict:
    content = (content or "").strip()
    if not content:
        raise ShopError("Note is empty.")
    note = {
        "id": new_id(),
        "timestamp": now_iso(),
        "author": author or DEFAULT_AUTHOR,
        "content": content,
    }
    return {**order, "notes": [note, *order.get("notes", [])]}


# ---------- parts ----------
def add_part_from_inventory(order: dict, item: dict, quantity: int = 1) -> dict:
    part = {
        "id": new_id(),
        "partNumber": item["partNumber"],
        "description": item.get("description", ""),
        "price": item.get("unitPrice", 0),
        "quantity": quantity,
    }
    return {**order, "parts": [*order.get("parts", []), part]}


def add_manual_part(order: dict, part_number: str = "NEW-PART", description: str = "Generic Part",
                    price: float = 0, quantity: int = 1) -> dict:
    part = {
        "id": new_id(),
        "partNumber": part_number or "NEW-PART",
        "description": description or "Generic Part",
        "price": price,
        "quantity": quantity,
    }
    return {**order, "parts": [*order.get("parts", []), part]}


def _coerce_line(changes: dict) -> dict:
    out = {}
    for field in ("price", "hours", "rate"):
        if field in changes:
            out[field] = parse_amount(changes[field], None, field)
            if out[field] is None:
                raise ShopError(f"{field} is required")
    if "quantity" in changes:
        out["quantity"] = parse_int(changes["quantity"], None, "quantity")
        if out["quantity"] is None or out["quantity"] < 0:
            raise ShopError("quantity must be a whole number, 0 or more")
    return out


def _replace_line(lines: list, line_id: str, changes: dict, allowed: set, kind: str) -> list:
    unknown = set(changes) - allowed
    if unknown:
        raise ShopError(f"Cannot change {sorted(unknown)} on a {kind}")
    if not any(line["id"] == line_id for line in lines):
        raise ShopError(f"No {kind} with id {line_id!r}")
    changes = {**changes, **_coerce_line(changes)}
    return [{**line, **changes} if line["id"] == line_id else line for line in lines]


def update_part(order: dict, part_id: str, changes: dict) -> dict:
    parts = _replace_line(order.get("parts", []), part_id, changes,
                          {"partNumber", "description", "price", "quantity"}, "part")
    return {**order, "parts": parts}


def remove_part(order: dict, part_id: str) -> dict:
    return {**order, "parts": [p for p in order.get("parts", []) if p["id"] != part_id]}


# ---------- labor ----------
def add_labor(order: dict, rate: float, hours: float = 1.0, description: str = "Manual Entry",
              technician: Optional[str] = None) -> dict:
    entry = {
        "id": new_id(),
        "technician": technician or DEFAULT_AUTHOR,
        "description": description,
        "hours": hours,
        "rate": rate,
        "timestamp": now_iso(),
    }
    return {**order, "laborEntries": [*order.get("laborEntries", []), entry]}


def update_labor_entry(order: dict, entry_id: str, changes: dict) -> dict:
    entries = _replace_line(order.get("laborEntries", []), entry_id, changes,
                            {"technician", "description", "hours", "rate"}, "labor entry")
    return {**order, "laborEntries": entries}


def timed_hours(started: datetime, stopped: datetime) -> float:
    """Punch clock duration in hours, 2 dp, never below 0.01."""
    hours = round((stopped - started).total_seconds() / 3600, 2)
    return hours if hours > MIN_TIMED_HOURS else MIN_TIMED_HOURS


def punch_in(order: dict, now: Optional[datetime] = None) -> dict:
    if order.get("punchedInAt"):
        raise ShopError(f"{order['orderNumber']} is already punched in.")
    return {**order, "punchedInAt": (now or datetime.now()).isoformat(timespec="seconds")}


def punch_out(order: dict, rate: float, now: Optional[datetime] = None,
              technician: Optional[str] = None) -> dict:
    """Close the running timer and log it as a labor entry."""
    started = order.get("punchedInAt")
    if not started:
        raise ShopError(f"{order['orderNumber']} is not punched in.")
    order = {k: v for k, v in order.items() if k != "punchedInAt"}
    return add_labor(order, rate, hours=timed_hours(datetime.fromisoformat(started), now or datetime.now()),
                     description="Timed Labor Session", technician=technician)


# ---------- totals ----------
def parts_total(order: dict) -> Decimal:
    return sum((money(p.get("price")) * money(p.get("quantity")) for p in order.get("parts", [])), Decimal(0))


def labor_total(order: dict) -> Decimal:
    return sum((money(e.get("hours")) * money(e.get("rate")) for e in order.get("laborEntries", [])), Decimal(0))


def order_total(order: dict) -> Decimal:
    return parts_total(order) + labor_total(order)


def totals(order: dict) -> dict:
    return {
        "parts": float(parts_total(order)),
        "labor": float(labor_total(order)),
        "total": float(order_total(order)),
    }


# ---------- inspection ----------
def update_inspection(order: dict, results: dict) -> dict:
    bad = {k: v for k, v in results.items() if v not in INSPECTION_RESULTS}
    if bad:
        raise ShopError(f"Inspection results must be one of {INSPECTION_RESULTS}: {bad}")
    inspection = {**default_inspection(), **order.get("inspection", {}), **results}
    return {**order, "inspection": inspection}


def add_image(order: dict, path: str) -> dict:
    return {**order, "images": [*order.get("images", []), path]}


def filter_orders(work_orders: list, vehicle_type: str = "ALL", status: str = "ALL") -> list:
    return [
        o for o in work_orders
        if (vehicle_type == "ALL" or o.get("vehicleType") == vehicle_type)
        and (status == "ALL" or o.get("status") == status)
    ]


def search_inventory(inventory: list, q: str, limit: int = 5) -> list:
    q = (q or "").lower()
    return [
        i for i in inventory
        if q in (i.get("partNumber") or "").lower() or q in (i.get("description") or "").lower()
    ][:limit]


def unit_details(order: dict) -> str:
    return f"{order.get('year', '')} {order.get('make', '')} {order.get('model', '')}".strip()
