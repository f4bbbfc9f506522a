"""Parts orders: procurement requests, optionally tied to a work order by number."""

import enum
from datetime import date
from typing import Optional

from errors import ShopError
from utils import as_bool, new_id, parse_int, today_str


class OrderStatus(str, enum.Enum):
    TO_ORDER = "To Order"
    PENDING = "Pending"
    BACKORDERED = "Backordered"
    RECEIVED = "Received"


ORDER_STATUSES = [s.value for s in OrderStatus]


def _quantity(value, default: int) -> int:
    quantity = parse_int(value, default, "quantity")
    if quantity < 1:
        raise ShopError("quantity must be at least 1")
    return quantity


def new_parts_order(data: dict, today: Optional[date] = None) -> dict:
    if not (data.get("partNumber") or "").strip():
        raise ShopError("partNumber is required.")
    status = data.get("status") or OrderStatus.TO_ORDER.value
    if status not in ORDER_STATUSES:
        raise ShopError(f"Unknown parts order status {status!r}")
    quantity = _quantity(data.get("quantity"), 1)
    order = {
        "id": new_id(),
        "partNumber": data["partNumber"].strip(),
        "description": data.get("description") or "",
        "vendor": data.get("vendor") or "WPS",
        "quantity": quantity,
        "dateOrdered": data.get("dateOrdered") or today_str(today),
        "status": status,
        "isHighPriority": as_bool(data.get("isHighPriority")),
    }
    # plain string, not a real reference to a work order
    for optional in ("workOrderNumber", "customerName", "customerPhone"):
        if data.get(optional):
            order[optional] = data[optional]
    return order


def edit_parts_order(order: dict, changes: dict) -> dict:
    status = changes.get("status", order["status"])
    if status not in ORDER_STATUSES:
        raise ShopError(f"Unknown parts order status {status!r}")
    changes = {k: v for k, v in changes.items() if k != "id"}
    if "quantity" in changes:
        changes["quantity"] = _quantity(changes["quantity"], order.get("quantity", 1))
    if "isHighPriority" in changes:
        changes["isHighPriority"] = as_bool(changes["isHighPriority"])
    return {**order, **changes}


def mark_parts_received(work_orders: list, parts_order: dict) -> tuple[list, int]:
    """Flag work orders whose number matches a received parts order.

    Returns ``(work_orders, matched)``. Nothing matches -> the same list back,
    untouched, and no error.
    """
    wo_number = parts_order.get("workOrderNumber")
    if parts_order.get("status") != OrderStatus.RECEIVED.value or not wo_number:
        return work_orders, 0
    matched = sum(1 for wo in work_orders if wo.get("orderNumber") == wo_number)
    if not matched:
        return work_orders, 0
    return [
        {**wo, "partsReceived": True} if wo.get("orderNumber") == wo_number else wo
        for wo in work_orders
    ], matched


def bulk_ordered(parts_orders: list, vendor: str, today: Optional[date] = None) -> list:
    """Everything still "To Order" at ``vendor`` goes out now."""
    stamp = today_str(today)
    return [
        {**o, "status": OrderStatus.PENDING.value, "dateOrdered": stamp}
        if o.get("vendor") == vendor and o.get("status") == OrderStatus.TO_ORDER.value
        else o
        for o in parts_orders
    ]


def order_stats(parts_orders: list) -> dict:
    def count(status):
        return sum(1 for o in parts_orders if o.get("status") == status.value)

    return {
        "total": len(parts_orders),
        "pending": count(OrderStatus.PENDING),
        "backordered": count(OrderStatus.BACKORDERED),
        "toOrder": count(OrderStatus.TO_ORDER),
    }


def queue_order(parts_orders: list) -> list:
    """Open orders first, received ones at the bottom; stable otherwise."""
    return sorted(parts_orders, key=lambda o: o.get("status") == OrderStatus.RECEIVED.value)
