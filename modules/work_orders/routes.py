"""HTTP routes for work orders."""

import logging

from flask import current_app, jsonify, render_template, request

from errors import ShopError
from modules.diagnostics import get_diagnostic_suggestions
from modules.schematics.models import match_schematic
from store import CUSTOMERS, INVENTORY, WORK_ORDERS, get_state
from utils import as_bool, handle_file_upload, parse_amount, parse_int, request_data

from . import bp
from .models import (
    STATUS_SEQUENCE,
    VEHICLE_TYPES,
    add_image,
    add_labor,
    add_manual_part,
    add_note,
    add_part_from_inventory,
    create_order,
    edit_order,
    filter_orders,
    punch_in,
    punch_out,
    remove_part,
    search_inventory,
    set_status,
    totals,
    unit_details,
    update_inspection,
    update_labor_entry,
    update_part,
)

logger = logging.getLogger(__name__)


def _with_totals(order: dict) -> dict:
    return {**order, "totals": totals(order)}


def _save(order: dict) -> dict:
    get_state().update(WORK_ORDERS, order)
    return order


def _reply(order: dict, status: int = 200):
    return jsonify(ok=True, item=_with_totals(order)), status


def _rate(value=None) -> float:
    return parse_amount(value, current_app.config["SHOP_RATE"], "rate")


@bp.route("/")
def list_orders():
    vtype = request.args.get("type", "ALL")
    status = request.args.get("status", "ALL")
    items = filter_orders(get_state().work_orders, vehicle_type=vtype, status=status)
    return jsonify(ok=True, items=[_with_totals(o) for o in items],
                   statuses=STATUS_SEQUENCE, vehicleTypes=VEHICLE_TYPES)


@bp.route("/", methods=["POST"])
def create():
    state = get_state()
    order, work_orders, customers = create_order(state.work_orders, state.customers, request_data())
    # две отдельные записи, как и в UI: сначала клиенты, потом заказы
    state.replace(CUSTOMERS, customers)
    state.replace(WORK_ORDERS, work_orders)
    logger.info("Work order %s created for customer %s", order["orderNumber"], order["customerId"])
    return _reply(order, 201)


@bp.route("/<order_id>")
def view_order(order_id: str):
    state = get_state()
    order = state.get(WORK_ORDERS, order_id)
    return jsonify(ok=True, item=_with_totals(order), schematic=match_schematic(state.schematics, order))


@bp.route("/<order_id>", methods=["PUT", "PATCH"])
def update_order(order_id: str):
    order = get_state().get(WORK_ORDERS, order_id)
    changes = request_data()
    confirm = as_bool(changes.pop("confirm", False))
    return _reply(_save(edit_order(order, changes, confirm=confirm)))


@bp.route("/<order_id>/status", methods=["POST"])
def change_status(order_id: str):
    data = request_data()
    order = get_state().get(WORK_ORDERS, order_id)
    order = set_status(order, data.get("status"), confirm=as_bool(data.get("confirm")))
    logger.info("%s -> %s", order["orderNumber"], order["status"])
    return _reply(_save(order))


@bp.route("/<order_id>/notes", methods=["POST"])
def create_note(order_id: str):
    data = request_data()
    order = get_state().get(WORK_ORDERS, order_id)
    return _reply(_save(add_note(order, data.get("content"), data.get("author"))), 201)


# ---------- parts ----------
@bp.route("/parts-search")
def parts_search():
    return jsonify(ok=True, items=search_inventory(get_state().inventory, request.args.get("q", "")))


@bp.route("/<order_id>/parts", methods=["POST"])
def create_part(order_id: str):
    state = get_state()
    data = request_data()
    order = state.get(WORK_ORDERS, order_id)
    quantity = parse_int(data.get("quantity"), 1, "quantity")
    if data.get("inventoryId"):
        item = state.get(INVENTORY, data["inventoryId"])
        order = add_part_from_inventory(order, item, quantity=quantity)
    else:
        order = add_manual_part(
            order,
            part_number=data.get("partNumber"),
            description=data.get("description"),
            price=parse_amount(data.get("price"), 0, "price"),
            quantity=quantity,
        )
    return _reply(_save(order), 201)


@bp.route("/<order_id>/parts/<part_id>", methods=["PATCH"])
def edit_part(order_id: str, part_id: str):
    order = get_state().get(WORK_ORDERS, order_id)
    return _reply(_save(update_part(order, part_id, request_data())))


@bp.route("/<order_id>/parts/<part_id>", methods=["DELETE"])
def delete_part(order_id: str, part_id: str):
    order = get_state().get(WORK_ORDERS, order_id)
    return _reply(_save(remove_part(order, part_id)))


# ---------- labor ----------
@bp.route("/<order_id>/labor", methods=["POST"])
def create_labor(order_id: str):
    data = request_data()
    order = get_state().get(WORK_ORDERS, order_id)
    order = add_labor(
        order,
        _rate(data.get("rate")),
        hours=parse_amount(data.get("hours"), 1.0, "hours"),
        description=data.get("description") or "Manual Entry",
        technician=data.get("technician"),
    )
    return _reply(_save(order), 201)


@bp.route("/<order_id>/labor/<entry_id>", methods=["PATCH"])
def edit_labor(order_id: str, entry_id: str):
    order = get_state().get(WORK_ORDERS, order_id)
    return _reply(_save(update_labor_entry(order, entry_id, request_data())))


@bp.route("/<order_id>/punch-in", methods=["POST"])
def clock_in(order_id: str):
    order = get_state().get(WORK_ORDERS, order_id)
    return _reply(_save(punch_in(order)))


@bp.route("/<order_id>/punch-out", methods=["POST"])
def clock_out(order_id: str):
    data = request_data()
    order = get_state().get(WORK_ORDERS, order_id)
    return _reply(_save(punch_out(order, _rate(data.get("rate")), technician=data.get("technician"))))


# ---------- inspection / photos ----------
@bp.route("/<order_id>/inspection", methods=["PUT"])
def edit_inspection(order_id: str):
    order = get_state().get(WORK_ORDERS, order_id)
    return _reply(_save(update_inspection(order, request_data())))


@bp.route("/<order_id>/images", methods=["POST"])
def upload_image(order_id: str):
    order = get_state().get(WORK_ORDERS, order_id)
    path = handle_file_upload(request.files.get("photo"), current_app.config["UPLOAD_FOLDER"])
    if not path:
        raise ShopError("Invalid file format. Allowed: png, jpg, jpeg, gif")
    return _reply(_save(add_image(order, path)), 201)


# ---------- print documents ----------
@bp.route("/<order_id>/invoice")
def invoice(order_id: str):
    order = get_state().get(WORK_ORDERS, order_id)
    return render_template("print/invoice.html", order=order, totals=totals(order))


@bp.route("/<order_id>/work-sheet")
def work_sheet(order_id: str):
    order = get_state().get(WORK_ORDERS, order_id)
    return render_template("print/work_sheet.html", order=order)


# ---------- diagnostic assist ----------
@bp.route("/<order_id>/diagnostics", methods=["POST"])
def diagnostics(order_id: str):
    order = get_state().get(WORK_ORDERS, order_id)
    try:
        suggestions = get_diagnostic_suggestions(
            order.get("customerConcern", ""),
            unit_details(order),
            order.get("notes", []),
            api_key=current_app.config.get("GOOGLE_API_KEY"),
            model_name=current_app.config.get("GEMINI_MODEL", "gemini-1.5-flash"),
        )
    except Exception:
        # сбой ассистента не должен ронять карточку заказа
        logger.exception("Diagnostic assist failed for %s", order["orderNumber"])
        suggestions = None
    return jsonify(ok=True, suggestions=suggestions)
