"""Parts inventory records and stock checks."""

import csv
import io
from decimal import Decimal
from typing import Optional
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from errors import ShopError
from utils import money, new_id

CATEGORIES = ["Fluids", "Electrical", "Tires", "Engine", "Drivetrain", "Brakes", "Body", "Other"]

_NUMERIC = {"quantityOnHand": int, "minStock": int, "unitPrice": float}


def _coerce(data: dict) -> dict:
    out = dict(data)
    for field, kind in _NUMERIC.items():
        if field in out:
            try:
                out[field] = kind(out[field] or 0)
            except (TypeError, ValueError):
                raise ShopError(f"{field} must be a number") from None
            if out[field] < 0:
                raise ShopError(f"{field} cannot be negative")
    return out


def new_item(data: dict) -> dict:
    if not (data.get("partNumber") or "").strip():
        raise ShopError("partNumber is required.")
    data = _coerce(data)
    return {
        "id": new_id(),
        "partNumber": data["partNumber"].strip(),
        "description": data.get("description") or "",
        "category": data.get("category") or "Other",
        "brand": data.get("brand") or "",
        "preferredVendor": data.get("preferredVendor") or "",
        "quantityOnHand": data.get("quantityOnHand", 0),
        "minStock": data.get("minStock", 5),
        "unitPrice": data.get("unitPrice", 0.0),
        "binLocation": data.get("binLocation") or "",
    }


def edit_item(item: dict, changes: dict) -> dict:
    changes = {k: v for k, v in _coerce(changes).items() if k != "id"}
    return {**item, **changes}


def is_low_stock(item: dict) -> bool:
    """At or below the minimum counts as low."""
    return item.get("quantityOnHand", 0) <= item.get("minStock", 0)


def low_stock(inventory: list) -> list:
    return [i for i in inventory if is_low_stock(i)]


def stock_value(inventory: list) -> Decimal:
    return sum((money(i.get("unitPrice")) * money(i.get("quantityOnHand")) for i in inventory), Decimal(0))


def inventory_stats(inventory: list) -> dict:
    return {
        "items": len(inventory),
        "lowStock": len(low_stock(inventory)),
        "stockValue": float(stock_value(inventory)),
    }


def find_by_part_number(inventory: list, part_number: str) -> Optional[dict]:
    return next((i for i in inventory if i.get("partNumber") == part_number), None)


def search_items(inventory: list, q: str) -> list:
    q = (q or "").strip().lower()
    if not q:
        return list(inventory)
    fields = ("partNumber", "description", "category", "brand", "binLocation", "preferredVendor")
    return [i for i in inventory if any(q in str(i.get(f) or "").lower() for f in fields)]


# ---------- bulk import ----------
IMPORT_COLUMNS = ["partNumber", "description", "category", "brand", "preferredVendor",
                  "quantityOnHand", "minStock", "unitPrice", "binLocation"]


def rows_from_xlsx(stream) -> list:
    """First sheet, header row skipped, columns in ``IMPORT_COLUMNS`` order."""
    try:
        wb = load_workbook(stream, read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile) as e:
        raise ShopError(f"Not a valid .xlsx file: {e}") from None
    rows = []
    for row in wb.active.iter_rows(min_row=2, values_only=True):
        if not row or not row[0]:
            continue
        rows.append({
            col: (value if col in _NUMERIC else str(value))
            for col, value in zip(IMPORT_COLUMNS, row)
            if value is not None
        })
    wb.close()
    return rows


def rows_from_csv(text: str) -> list:
    reader = csv.DictReader(io.StringIO(text, newline=None))
    return [{k: v for k, v in row.items() if k in IMPORT_COLUMNS and v not in (None, "")} for row in reader]


def import_items(inventory: list, rows: list) -> tuple[list, list, list]:
    """Append new part numbers; ones already stocked are skipped, not updated.

    Returns ``(updated_inventory, added, skipped_part_numbers)``.
    """
    known = {i.get("partNumber") for i in inventory}
    added, skipped = [], []
    for row in rows:
        number = (row.get("partNumber") or "").strip()
        if not number:
            continue
        if number in known:
            skipped.append(number)
            continue
        item = new_item(row)
        known.add(number)
        added.append(item)
    return [*inventory, *added], added, skipped
