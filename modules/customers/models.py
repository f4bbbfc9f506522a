"""Customer records and fleet bookkeeping."""

from datetime import date
from typing import Optional

from errors import ShopError
from utils import new_id, today_str

PREFERRED_CONTACT = ["Call", "Text"]


def new_customer(data: dict, *, customer_id: Optional[str] = None) -> dict:
    """Customer record from form data; a brand-new record has ``lastVisit`` "New"."""
    name = (data.get("name") or "").strip()
    if not name:
        raise ShopError("Customer name is required.")
    contact = data.get("preferredContact") or "Call"
    if contact not in PREFERRED_CONTACT:
        raise ShopError(f"preferredContact must be one of {PREFERRED_CONTACT}")
    return {
        "id": customer_id or new_id(),
        "name": name,
        "phone": data.get("phone") or "",
        "email": data.get("email") or "",
        "address": data.get("address") or "",
        "preferredContact": contact,
        "fleet": list(data.get("fleet") or []),
        "lastVisit": data.get("lastVisit") or "New",
    }


def has_vin(customer: dict, vin: str) -> bool:
    vin = (vin or "").lower()
    return any((v.get("vin") or "").lower() == vin for v in customer.get("fleet", []))


def find_or_create_customer(
    customers: list,
    customer_id: Optional[str],
    name: Optional[str],
    phone: Optional[str],
    vehicle: dict,
    today: Optional[date] = None,
) -> tuple[str, list]:
    """Resolve the customer an intake belongs to.

    Without ``customer_id`` a new customer is synthesized holding exactly the
    given vehicle. With one, the vehicle joins that customer's fleet unless a
    vehicle with the same VIN (case-insensitive) is already there, and
    ``lastVisit`` is refreshed. Returns ``(target_id, updated_customers)``;
    the input list is not modified.
    """
    visit = today_str(today)

    if not customer_id:
        customer = {
            "id": new_id("c-"),
            "name": name or "Unknown",
            "phone": phone or "",
            "email": "",
            "address": "",
            "preferredContact": "Call",
            "lastVisit": visit,
            "fleet": [vehicle],
        }
        return customer["id"], [*customers, customer]

    updated = []
    for c in customers:
        if c["id"] == customer_id:
            fleet = c.get("fleet", [])
            c = {
                **c,
                "lastVisit": visit,
                "fleet": fleet if has_vin(c, vehicle.get("vin")) else [*fleet, vehicle],
            }
        updated.append(c)
    return customer_id, updated


def search_customers(customers: list, q: str, limit: Optional[int] = None) -> list:
    q = (q or "").strip().lower()
    if not q:
        return list(customers)
    found = [
        c for c in customers
        if q in (c.get("name") or "").lower() or q in (c.get("phone") or "").lower()
    ]
    return found[:limit] if limit else found


def start_work_order(customer: dict) -> dict:
    """Prepopulated intake payload for a known customer."""
    return {
        "customerName": customer["name"],
        "phone": customer.get("phone", ""),
        "customerId": customer["id"],
    }
