"""Archive module package."""

from flask import Blueprint

bp = Blueprint("archive", __name__, url_prefix="/archive")

from . import models  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "models", "routes"]
