"""HTTP routes for the schematics library."""

from flask import jsonify, request

from store import SCHEMATICS, WORK_ORDERS, get_state
from utils import request_data

from . import bp
from .models import filter_schematics, match_schematic, new_schematic


@bp.route("/")
def list_schematics():
    items = filter_schematics(get_state().schematics, request.args.get("type", "ALL"), request.args.get("q", ""))
    return jsonify(ok=True, items=items)


@bp.route("/", methods=["POST"])
def add_schematic():
    item = get_state().append(SCHEMATICS, new_schematic(request_data()))
    return jsonify(ok=True, item=item), 201


@bp.route("/for-order/<order_id>")
def for_order(order_id: str):
    state = get_state()
    order = state.get(WORK_ORDERS, order_id)
    return jsonify(ok=True, item=match_schematic(state.schematics, order))
