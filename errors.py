"""Domain errors and their JSON rendering."""

import logging

from flask import jsonify

logger = logging.getLogger(__name__)


class ShopError(ValueError):
    """Invalid input for a shop operation (HTTP 400)."""

    status_code = 400


class NotFound(ShopError):
    status_code = 404


class ConfirmationRequired(ShopError):
    """The transition needs an explicit ``confirm`` flag (only Picked Up does)."""

    status_code = 409


def register_error_handlers(app) -> None:
    @app.errorhandler(ShopError)
    def handle_shop_error(exc: ShopError):
        logger.info("%s: %s", type(exc).__name__, exc)
        return jsonify(ok=False, error=str(exc)), exc.status_code

    @app.errorhandler(404)
    def handle_not_found(exc):
        return jsonify(ok=False, error="not found"), 404
