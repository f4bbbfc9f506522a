import logging
import os
import secrets
import string
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from flask import request
from werkzeug.utils import secure_filename

from errors import ShopError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif'}

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_id(prefix: str = "") -> str:
    """Short random record id, e.g. ``k3v9x0q2m`` or ``c-k3v9x0q2m``."""
    return prefix + "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))


def today_str(today: date | None = None) -> str:
    return (today or date.today()).isoformat()


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


def parse_num(s):
    """Decimal from a form value; accepts ``63,750`` style commas. None if empty or invalid."""
    if s is None or s == "":
        return None
    if isinstance(s, bool):
        return None
    if isinstance(s, (int, float, Decimal)):
        return Decimal(str(s))
    s = str(s).strip().replace(",", ".")
    try:
        return Decimal(s)
    except InvalidOperation:
        return None


def parse_int(value, default, field: str = "value") -> int:
    """Whole number from a form value; empty means ``default``."""
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ShopError(f"{field} must be a whole number") from None


def parse_amount(value, default, field: str = "value"):
    """Non-negative float from a form value; empty means ``default``, garbage is a ShopError."""
    if value is None or value == "":
        return default
    amount = parse_num(value)
    if amount is None or not amount.is_finite() or amount < 0:
        raise ShopError(f"{field} must be a non-negative number")
    return float(amount)


def parse_date(s):
    """``date`` from an ISO date/datetime string, or None."""
    if not s:
        return None
    try:
        return datetime.fromisoformat(str(s)).date()
    except ValueError:
        return None


def money(value) -> Decimal:
    return Decimal(str(value or 0))


def allowed_file(filename):
    """Check if the file has an allowed extension."""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def handle_file_upload(file, upload_folder):
    """Save uploaded file to upload folder and return the file path, or None."""
    if file and allowed_file(file.filename):
        filename = secure_filename(file.filename)
        os.makedirs(upload_folder, exist_ok=True)
        filepath = os.path.join(upload_folder, filename)
        file.save(filepath)
        return filepath
    logger.warning("Rejected upload %r: allowed png, jpg, jpeg, gif", getattr(file, "filename", None))
    return None


def request_data() -> dict:
    """JSON body if there is one, otherwise the submitted form."""
    data = request.get_json(force=False, silent=True)
    if data is None:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        raise ShopError("Expected a JSON object.")
    return data


def as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
