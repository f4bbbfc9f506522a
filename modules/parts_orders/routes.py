"""HTTP routes for the parts order queue."""

import logging

from flask import jsonify, request

from errors import ShopError
from store import PARTS_ORDERS, WORK_ORDERS, get_state
from utils import request_data

from . import bp
from .models import (
    ORDER_STATUSES,
    OrderStatus,
    bulk_ordered,
    edit_parts_order,
    mark_parts_received,
    new_parts_order,
    order_stats,
    queue_order,
)

logger = logging.getLogger(__name__)


def _store_update(order: dict) -> dict:
    """Write the parts order, then flag the linked work order as a separate write."""
    state = get_state()
    state.update(PARTS_ORDERS, order)
    work_orders, matched = mark_parts_received(state.work_orders, order)
    if matched:
        state.replace(WORK_ORDERS, work_orders)
        logger.info("Parts %s received for %s", order["partNumber"], order["workOrderNumber"])
    return order


@bp.route("/")
def list_parts_orders():
    orders = get_state().parts_orders
    status = request.args.get("status")
    items = [o for o in orders if o.get("status") == status] if status else orders
    return jsonify(ok=True, items=queue_order(items), stats=order_stats(orders), statuses=ORDER_STATUSES)


@bp.route("/", methods=["POST"])
def add_parts_order():
    order = get_state().prepend(PARTS_ORDERS, new_parts_order(request_data()))
    return jsonify(ok=True, item=order), 201


@bp.route("/<order_id>", methods=["PUT", "PATCH"])
def update_parts_order(order_id: str):
    order = edit_parts_order(get_state().get(PARTS_ORDERS, order_id), request_data())
    return jsonify(ok=True, item=_store_update(order))


@bp.route("/<order_id>/receive", methods=["POST"])
def receive(order_id: str):
    order = edit_parts_order(get_state().get(PARTS_ORDERS, order_id), {"status": OrderStatus.RECEIVED.value})
    return jsonify(ok=True, item=_store_update(order))


@bp.route("/bulk-ordered", methods=["POST"])
def mark_vendor_ordered():
    vendor = (request_data().get("vendor") or "").strip()
    if not vendor:
        raise ShopError("vendor is required.")
    state = get_state()
    items = state.replace(PARTS_ORDERS, bulk_ordered(state.parts_orders, vendor))
    return jsonify(ok=True, items=queue_order(items), stats=order_stats(items))
