"""HTTP routes for the parts inventory."""

import logging

from flask import jsonify, request

from errors import ShopError
from store import INVENTORY, get_state
from utils import as_bool, request_data

from . import bp
from .models import (
    CATEGORIES,
    edit_item,
    import_items,
    inventory_stats,
    is_low_stock,
    low_stock,
    new_item,
    rows_from_csv,
    rows_from_xlsx,
    search_items,
)

logger = logging.getLogger(__name__)


def _row(item: dict) -> dict:
    return {**item, "isLowStock": is_low_stock(item)}


@bp.route("/")
def list_items():
    inventory = get_state().inventory
    items = search_items(inventory, request.args.get("q", ""))
    if as_bool(request.args.get("lowStock")):
        items = low_stock(items)
    return jsonify(ok=True, items=[_row(i) for i in items], stats=inventory_stats(inventory),
                   categories=CATEGORIES)


@bp.route("/", methods=["POST"])
def add_item():
    item = get_state().append(INVENTORY, new_item(request_data()))
    return jsonify(ok=True, item=_row(item)), 201


@bp.route("/<item_id>")
def view_item(item_id: str):
    return jsonify(ok=True, item=_row(get_state().get(INVENTORY, item_id)))


@bp.route("/<item_id>", methods=["PUT", "PATCH"])
def update_item(item_id: str):
    state = get_state()
    item = edit_item(state.get(INVENTORY, item_id), request_data())
    return jsonify(ok=True, item=_row(state.update(INVENTORY, item)))


@bp.route("/import", methods=["POST"])
def import_inventory():
    file = request.files.get("file")
    if not file or not file.filename:
        raise ShopError("No file uploaded.")

    filename = file.filename.lower()
    if filename.endswith(".xlsx"):
        rows = rows_from_xlsx(file.stream)
    elif filename.endswith(".csv"):
        rows = rows_from_csv(file.stream.read().decode("utf-8-sig"))
    else:
        raise ShopError("Unsupported file type. Please upload .xlsx or .csv.")

    state = get_state()
    inventory, added, skipped = import_items(state.inventory, rows)
    if added:
        state.replace(INVENTORY, inventory)
    logger.info("Inventory import %s: %d added, %d skipped", file.filename, len(added), len(skipped))
    return jsonify(ok=True, added=len(added), skipped=skipped, items=[_row(i) for i in added])
