import logging
import os

from flask import Flask
from dotenv import load_dotenv

load_dotenv()

from config import Config  # noqa: E402  (load_dotenv needs to run first)
from errors import register_error_handlers  # noqa: E402
from extensions import db  # noqa: E402  (load_dotenv needs to run first)
from store import init_state  # noqa: E402


def create_app(test_config: dict | None = None) -> Flask:
    """Application factory for the shop."""

    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    # init extensions
    db.init_app(app)
    register_error_handlers(app)

    # blueprints
    from modules.work_orders import bp as work_orders_bp
    from modules.customers import bp as customers_bp
    from modules.inventory import bp as inventory_bp
    from modules.parts_orders import bp as parts_orders_bp
    from modules.vendors import bp as vendors_bp
    from modules.schedule import bp as schedule_bp
    from modules.archive import bp as archive_bp
    from modules.schematics import bp as schematics_bp

    app.register_blueprint(work_orders_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(inventory_bp)
    app.register_blueprint(parts_orders_bp)
    app.register_blueprint(vendors_bp)
    app.register_blueprint(schedule_bp)
    app.register_blueprint(archive_bp)
    app.register_blueprint(schematics_bp)

    from ui_routes import ui
    app.register_blueprint(ui)  # командный центр "/"

    # DB
    with app.app_context():
        # Важно: модели должны быть импортированы до create_all()
        import models  # noqa: F401

        db.create_all()

    # состояние цеха целиком в памяти, по коллекции на строку в БД
    init_state(app)

    # uploads dir
    os.makedirs(app.config.get("UPLOAD_FOLDER", "uploads"), exist_ok=True)

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    app.run(debug=True)
