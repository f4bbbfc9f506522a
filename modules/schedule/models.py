"""Appointments and the week/month calendar read-models."""

import calendar
import enum
from datetime import date, datetime, timedelta
from typing import Optional

from errors import ShopError
from utils import new_id, parse_int


class AppointmentType(str, enum.Enum):
    STANDARD = "Standard Service"
    EMERGENCY = "Emergency Repair"
    PICKUP = "Unit Pickup"


APPOINTMENT_TYPES = [t.value for t in AppointmentType]
WORK_WEEK_DAYS = 5
DEFAULT_DURATION = 60


def parse_start(value) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise ShopError(f"startTime {value!r} is not an ISO date-time") from None


def new_appointment(data: dict) -> dict:
    if not (data.get("customerName") or "").strip():
        raise ShopError("customerName is required.")
    kind = data.get("type") or AppointmentType.STANDARD.value
    if kind not in APPOINTMENT_TYPES:
        raise ShopError(f"type must be one of {APPOINTMENT_TYPES}")
    start = parse_start(data.get("startTime") or datetime.now().replace(minute=0, second=0, microsecond=0))
    apt = {
        "id": new_id(),
        "customerName": data["customerName"].strip(),
        "phone": data.get("phone") or "",
        "vehicleInfo": data.get("vehicleInfo") or "",
        "type": kind,
        "startTime": start.isoformat(),
        "durationMinutes": parse_int(data.get("durationMinutes"), DEFAULT_DURATION, "durationMinutes"),
        "notes": data.get("notes") or "",
    }
    if data.get("customerId"):
        apt["customerId"] = data["customerId"]
    return apt


def edit_appointment(apt: dict, changes: dict) -> dict:
    changes = {k: v for k, v in changes.items() if k != "id"}
    if "type" in changes and changes["type"] not in APPOINTMENT_TYPES:
        raise ShopError(f"type must be one of {APPOINTMENT_TYPES}")
    if "startTime" in changes:
        changes["startTime"] = parse_start(changes["startTime"]).isoformat()
    return {**apt, **changes}


def week_days(cursor: date) -> list[date]:
    """Monday..Friday of the week holding ``cursor`` (a Sunday belongs to the week before)."""
    monday = cursor - timedelta(days=cursor.weekday())
    return [monday + timedelta(days=i) for i in range(WORK_WEEK_DAYS)]


def month_grid(cursor: date) -> list[list[date]]:
    """Monday-start weeks covering the month of ``cursor``, padded with neighbour days."""
    return calendar.Calendar(firstweekday=calendar.MONDAY).monthdatescalendar(cursor.year, cursor.month)


def shift_cursor(cursor: date, mode: str, step: int) -> date:
    if mode == "month":
        month = cursor.month - 1 + step
        year = cursor.year + month // 12
        month = month % 12 + 1
        return date(year, month, min(cursor.day, calendar.monthrange(year, month)[1]))
    return cursor + timedelta(weeks=step)


def business_hours(start: int, end: int) -> list[int]:
    return list(range(start, end + 1))


def format_hour(h: int) -> str:
    return f"{h - 12 if h > 12 else h}:00 {'PM' if h >= 12 else 'AM'}"


def appointments_for(appointments: list, day: date, hour: Optional[int] = None) -> list:
    found = []
    for apt in appointments:
        start = parse_start(apt["startTime"])
        if start.date() == day and (hour is None or start.hour == hour):
            found.append(apt)
    return found


def week_board(appointments: list, cursor: date, hours: list[int]) -> dict:
    days = week_days(cursor)
    return {
        "days": [d.isoformat() for d in days],
        "hours": [{"hour": h, "label": format_hour(h)} for h in hours],
        "slots": {
            d.isoformat(): {str(h): appointments_for(appointments, d, h) for h in hours}
            for d in days
        },
    }


def month_board(appointments: list, cursor: date) -> dict:
    return {
        "month": cursor.strftime("%Y-%m"),
        "weeks": [
            [
                {
                    "date": d.isoformat(),
                    "inMonth": d.month == cursor.month,
                    "appointments": appointments_for(appointments, d),
                }
                for d in week
            ]
            for week in month_grid(cursor)
        ],
    }


def reschedule(apt: dict, day: date, hour: Optional[int] = None) -> dict:
    """Drop an appointment on another day (and optionally another hour)."""
    start = parse_start(apt["startTime"])
    moved = start.replace(year=day.year, month=day.month, day=day.day)
    if hour is not None:
        if not 0 <= hour <= 23:
            raise ShopError("hour must be between 0 and 23")
        moved = moved.replace(hour=hour, minute=0, second=0, microsecond=0)
    return {**apt, "startTime": moved.isoformat()}


def convert_to_work_order(apt: dict) -> dict:
    """Prepopulated intake payload for an appointment."""
    payload = {
        "customerName": apt["customerName"],
        "phone": apt.get("phone", ""),
        "customerConcern": apt.get("notes") or f"Scheduled as {apt['type']}",
    }
    if apt.get("customerId"):
        payload["customerId"] = apt["customerId"]
    return payload


def shop_capacity(active_orders: int, capacity: int) -> float:
    """Advisory load percentage, capped at 100."""
    if capacity <= 0:
        return 100.0
    return min(active_orders / capacity * 100, 100.0)
