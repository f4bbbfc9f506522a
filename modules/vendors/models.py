"""Vendors and the free-shipping procurement read-model."""

from decimal import Decimal

from errors import ShopError
from modules.inventory.models import find_by_part_number
from modules.parts_orders.models import OrderStatus
from utils import money, new_id


def new_vendor(data: dict) -> dict:
    if not (data.get("name") or "").strip():
        raise ShopError("Vendor name is required.")
    return {
        "id": new_id(),
        "name": data["name"].strip(),
        "accountNumber": data.get("accountNumber") or "",
        "contactPerson": data.get("contactPerson") or "",
        "freeShippingThreshold": _threshold(data.get("freeShippingThreshold", 500)),
    }


def edit_vendor(vendor: dict, changes: dict) -> dict:
    changes = {k: v for k, v in changes.items() if k != "id"}
    if "freeShippingThreshold" in changes:
        changes["freeShippingThreshold"] = _threshold(changes["freeShippingThreshold"])
    return {**vendor, **changes}


def _threshold(value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ShopError("freeShippingThreshold must be a number") from None
    if value < 0:
        raise ShopError("freeShippingThreshold cannot be negative")
    return value


def line_value(parts_order: dict, inventory: list) -> Decimal:
    """unitPrice from inventory times quantity; unknown parts count as 0."""
    item = find_by_part_number(inventory, parts_order.get("partNumber"))
    price = money(item.get("unitPrice")) if item else Decimal(0)
    return price * money(parts_order.get("quantity"))


def procurement_summary(parts_orders: list, inventory: list, vendors: list) -> list:
    """Per-vendor batch of "To Order" lines against the free-shipping threshold.

    Recomputed from scratch on every call. Vendors appear in the order their
    first pending line does.
    """
    groups: dict[str, list] = {}
    for o in parts_orders:
        if o.get("status") == OrderStatus.TO_ORDER.value:
            groups.setdefault(o.get("vendor") or "", []).append(o)

    by_name = {v["name"]: v for v in vendors}
    rows = []
    for name, orders in groups.items():
        total = sum((line_value(o, inventory) for o in orders), Decimal(0))
        vendor = by_name.get(name)
        threshold = money(vendor["freeShippingThreshold"]) if vendor else Decimal(0)
        if threshold > 0:
            progress = min(total / threshold * 100, Decimal(100))
        else:
            progress = Decimal(100)
        rows.append({
            "vendor": name,
            "vendorId": vendor["id"] if vendor else None,
            "total": float(total),
            "threshold": float(threshold),
            "remaining": float(max(threshold - total, Decimal(0))),
            "progress": round(float(progress), 1),
            "qualifiesForFreeShipping": total >= threshold,
            "orders": orders,
        })
    return rows
