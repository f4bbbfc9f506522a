"""Schedule module package."""

from flask import Blueprint

bp = Blueprint("schedule", __name__, url_prefix="/schedule")

from . import models  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "models", "routes"]
