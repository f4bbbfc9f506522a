"""HTTP routes for the service archive."""

from datetime import datetime

from flask import jsonify, make_response, request

from modules.work_orders.models import totals
from store import get_state
from utils import parse_date

from . import bp
from .models import export_csv, filter_archive


def _filtered() -> list:
    return filter_archive(
        get_state().work_orders,
        search=request.args.get("q", ""),
        date_from=parse_date(request.args.get("from")),
        date_to=parse_date(request.args.get("to")),
    )


@bp.route("/")
def list_archive():
    return jsonify(ok=True, items=[{**wo, "totals": totals(wo)} for wo in _filtered()])


@bp.route("/export.csv")
def export():
    resp = make_response(export_csv(_filtered()))
    resp.headers["Content-Type"] = "text/csv; charset=utf-8"
    resp.headers["Content-Disposition"] = \
        f"attachment; filename=Service_Archive_Export_{datetime.now():%Y-%m-%d}.csv"
    return resp
