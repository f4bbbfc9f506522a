"""HTTP routes for customers and their fleets."""

from flask import jsonify, request

from store import CUSTOMERS, WORK_ORDERS, get_state
from utils import request_data

from . import bp
from .models import new_customer, search_customers, start_work_order


@bp.route("/")
def list_customers():
    items = search_customers(get_state().customers, request.args.get("q", ""))
    return jsonify(ok=True, items=items, count=len(items))


@bp.route("/", methods=["POST"])
def add_customer():
    customer = get_state().append(CUSTOMERS, new_customer(request_data()))
    return jsonify(ok=True, item=customer), 201


@bp.route("/<customer_id>")
def view_customer(customer_id: str):
    state = get_state()
    customer = state.get(CUSTOMERS, customer_id)
    history = [wo for wo in state[WORK_ORDERS] if wo.get("customerId") == customer_id]
    return jsonify(ok=True, item=customer, workOrders=history)


@bp.route("/<customer_id>", methods=["PUT", "PATCH"])
def edit_customer(customer_id: str):
    state = get_state()
    customer = state.get(CUSTOMERS, customer_id)
    merged = new_customer({**customer, **request_data()}, customer_id=customer_id)
    return jsonify(ok=True, item=state.update(CUSTOMERS, merged))


@bp.route("/<customer_id>/start-work-order", methods=["POST"])
def start_order(customer_id: str):
    customer = get_state().get(CUSTOMERS, customer_id)
    return jsonify(ok=True, prepopulated=start_work_order(customer))
