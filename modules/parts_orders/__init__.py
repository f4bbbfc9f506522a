"""Parts orders module package."""

from flask import Blueprint

bp = Blueprint("parts_orders", __name__, url_prefix="/parts-orders")

from . import models  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "models", "routes"]
