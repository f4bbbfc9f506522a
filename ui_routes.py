# ui_routes.py: командный центр, сводка по цеху и карта разделов
from datetime import date

from flask import Blueprint, current_app, jsonify, request, url_for

from modules.inventory.models import low_stock
from modules.parts_orders.models import order_stats
from modules.schedule.models import appointments_for, shop_capacity
from modules.work_orders.models import (
    STATUS_SEQUENCE,
    TRIAGE_STATUSES,
    WorkOrderStatus,
    filter_orders,
    is_active,
)
from store import get_state

ui = Blueprint("ui", __name__)

# view name -> endpoint; the single "current view" switch of the shop UI
VIEWS = {
    "OVERVIEW": "ui.home",
    "CREATE": "work_orders.create",
    "INVENTORY": "inventory.list_items",
    "CUSTOMERS": "customers.list_customers",
    "ORDERS": "parts_orders.list_parts_orders",
    "VENDORS": "vendors.list_vendors",
    "CALENDAR": "schedule.board",
    "ARCHIVE": "archive.list_archive",
    "SCHEMATICS": "schematics.list_schematics",
}


def command_center(state, today: date, capacity: int) -> dict:
    orders = state.work_orders
    active = [o for o in orders if is_active(o)]
    return {
        "arrivingToday": len(appointments_for(state.appointments, today)),
        "readyForPickup": sum(1 for o in orders if o.get("status") == WorkOrderStatus.READY.value),
        "needsTriage": sum(1 for o in orders if o.get("status") in TRIAGE_STATUSES),
        "activeOrders": len(active),
        "shopCapacity": round(shop_capacity(len(active), capacity), 1),
        "lowStock": len(low_stock(state.inventory)),
        "partsOrders": order_stats(state.parts_orders),
    }


@ui.route("/")
def home():
    state = get_state()
    vtype = request.args.get("type", "ALL")
    status = request.args.get("status", "ALL")
    active = [o for o in filter_orders(state.work_orders, vtype, status) if is_active(o)]
    return jsonify(
        ok=True,
        stats=command_center(state, date.today(), current_app.config["SHOP_CAPACITY"]),
        activeOrders=active,
        statuses=STATUS_SEQUENCE,
        views={name: url_for(endpoint) for name, endpoint in VIEWS.items()},
    )
