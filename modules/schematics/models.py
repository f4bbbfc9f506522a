"""Model schematics library."""

from typing import Optional

from errors import ShopError
from modules.work_orders.models import VEHICLE_TYPES
from utils import new_id


def new_schematic(data: dict) -> dict:
    for field in ("year", "make", "model", "diagramUrl"):
        if not str(data.get(field) or "").strip():
            raise ShopError(f"{field} is required.")
    vtype = data.get("vehicleType") or VEHICLE_TYPES[0]
    if vtype not in VEHICLE_TYPES:
        raise ShopError(f"vehicleType must be one of {VEHICLE_TYPES}")
    return {
        "id": new_id(),
        "year": str(data["year"]).strip(),
        "make": data["make"].strip(),
        "model": data["model"].strip(),
        "vehicleType": vtype,
        "diagramUrl": data["diagramUrl"].strip(),
    }


def match_schematic(schematics: list, order: dict) -> Optional[dict]:
    """Exact year + make + model match; first hit wins."""
    key = (str(order.get("year", "")), order.get("make", ""), order.get("model", ""))
    return next((s for s in schematics if (str(s.get("year", "")), s.get("make", ""), s.get("model", "")) == key), None)


def filter_schematics(schematics: list, vehicle_type: str = "ALL", q: str = "") -> list:
    q = (q or "").lower()
    return [
        s for s in schematics
        if (vehicle_type == "ALL" or s.get("vehicleType") == vehicle_type)
        and (not q or q in f"{s.get('year', '')} {s.get('make', '')} {s.get('model', '')}".lower())
    ]
