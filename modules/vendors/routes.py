"""HTTP routes for vendors and the procurement board."""

from flask import jsonify

from store import VENDORS, get_state
from utils import request_data

from . import bp
from .models import edit_vendor, new_vendor, procurement_summary


@bp.route("/")
def list_vendors():
    return jsonify(ok=True, items=get_state().vendors)


@bp.route("/", methods=["POST"])
def add_vendor():
    vendor = get_state().append(VENDORS, new_vendor(request_data()))
    return jsonify(ok=True, item=vendor), 201


@bp.route("/<vendor_id>", methods=["PUT", "PATCH"])
def update_vendor(vendor_id: str):
    state = get_state()
    vendor = edit_vendor(state.get(VENDORS, vendor_id), request_data())
    return jsonify(ok=True, item=state.update(VENDORS, vendor))


@bp.route("/procurement")
def procurement():
    state = get_state()
    return jsonify(ok=True, items=procurement_summary(state.parts_orders, state.inventory, state.vendors))
