"""Completed work orders: search and CSV export."""

import csv
import io
from datetime import date
from typing import Optional

from modules.work_orders.models import CLOSED_STATUSES, order_total, unit_details
from utils import parse_date

CSV_HEADERS = ["Order #", "Date", "Customer", "Vehicle", "VIN", "Total Amount"]


def archived_orders(work_orders: list) -> list:
    return [wo for wo in work_orders if wo.get("status") in CLOSED_STATUSES]


def filter_archive(work_orders: list, search: str = "", date_from: Optional[date] = None,
                   date_to: Optional[date] = None) -> list:
    q = (search or "").lower()
    found = []
    for wo in archived_orders(work_orders):
        haystack = (wo.get("customerName", ""), wo.get("vin", ""), wo.get("orderNumber", ""), wo.get("model", ""))
        if q and not any(q in (v or "").lower() for v in haystack):
            continue
        created = parse_date(wo.get("createdAt"))
        if date_from and (created is None or created < date_from):
            continue
        if date_to and (created is None or created > date_to):
            continue
        found.append(wo)
    return found


def export_csv(work_orders: list) -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for wo in work_orders:
        created = parse_date(wo.get("createdAt"))
        writer.writerow([
            wo.get("orderNumber", ""),
            created.isoformat() if created else "",
            wo.get("customerName", ""),
            unit_details(wo),
            wo.get("vin", ""),
            f"{order_total(wo):.2f}",
        ])
    return out.getvalue()
