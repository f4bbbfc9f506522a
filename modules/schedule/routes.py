"""HTTP routes for the service schedule."""

from datetime import date

from flask import current_app, jsonify, request

from errors import ShopError
from store import APPOINTMENTS, get_state
from utils import parse_date, parse_int, request_data

from . import bp
from .models import (
    APPOINTMENT_TYPES,
    business_hours,
    convert_to_work_order,
    edit_appointment,
    month_board,
    new_appointment,
    reschedule,
    shift_cursor,
    week_board,
)


def _cursor() -> date:
    raw = request.args.get("date")
    cursor = parse_date(raw)
    if raw and cursor is None:
        raise ShopError(f"date {raw!r} is not an ISO date")
    return cursor or date.today()


@bp.route("/")
def board():
    mode = request.args.get("view", "week")
    if mode not in ("week", "month"):
        raise ShopError("view must be 'week' or 'month'")
    cursor = _cursor()
    appointments = get_state().appointments
    if mode == "month":
        grid = month_board(appointments, cursor)
    else:
        hours = business_hours(current_app.config["BUSINESS_HOURS_START"], current_app.config["BUSINESS_HOURS_END"])
        grid = week_board(appointments, cursor, hours)
    return jsonify(
        ok=True,
        view=mode,
        date=cursor.isoformat(),
        prev=shift_cursor(cursor, mode, -1).isoformat(),
        next=shift_cursor(cursor, mode, 1).isoformat(),
        types=APPOINTMENT_TYPES,
        board=grid,
    )


@bp.route("/appointments", methods=["POST"])
def add_appointment():
    apt = get_state().append(APPOINTMENTS, new_appointment(request_data()))
    return jsonify(ok=True, item=apt), 201


@bp.route("/appointments/<apt_id>", methods=["PUT", "PATCH"])
def update_appointment(apt_id: str):
    state = get_state()
    apt = edit_appointment(state.get(APPOINTMENTS, apt_id), request_data())
    return jsonify(ok=True, item=state.update(APPOINTMENTS, apt))


@bp.route("/appointments/<apt_id>/reschedule", methods=["POST"])
def move_appointment(apt_id: str):
    data = request_data()
    day = parse_date(data.get("date"))
    if day is None:
        raise ShopError("date is required (YYYY-MM-DD).")
    hour = parse_int(data.get("hour"), None, "hour")
    state = get_state()
    apt = reschedule(state.get(APPOINTMENTS, apt_id), day, hour)
    return jsonify(ok=True, item=state.update(APPOINTMENTS, apt))


@bp.route("/appointments/<apt_id>/convert", methods=["POST"])
def convert(apt_id: str):
    state = get_state()
    apt = state.get(APPOINTMENTS, apt_id)
    prepopulated = convert_to_work_order(apt)
    state.remove(APPOINTMENTS, apt_id)
    return jsonify(ok=True, prepopulated=prepopulated)
