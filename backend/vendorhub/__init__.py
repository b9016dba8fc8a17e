# backend/vendorhub/__init__.py
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .config import Config
from .extensions import db, migrate
from .validation import StorageError


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # Record store (memory | file | sql), owned by this app instance
    _open_store(app)

    # Register blueprints
    from .routes.system import system_bp
    from .routes.data import data_bp
    from .routes.vendors import vendors_bp
    from .routes.brands import brands_bp
    from .routes.issues import issues_bp
    from .routes.invoices import invoices_bp
    from .routes.settlements import settlements_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(data_bp)
    app.register_blueprint(vendors_bp)
    app.register_blueprint(brands_bp)
    app.register_blueprint(issues_bp)
    app.register_blueprint(invoices_bp)
    app.register_blueprint(settlements_bp)

    _register_error_handlers(app)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin in app.config["CORS_ORIGINS"]:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,DELETE,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app


def _open_store(app: Flask) -> None:
    """
    Build the configured store, verify it is reachable and create its
    schema. A store that cannot be opened at startup is fatal.
    """
    from .services.data_service import seed_demo_data
    from .stores import build_store

    with app.app_context():
        try:
            store = build_store(app)
            info = store.check_connection()
            store.init_schema()
        except StorageError as e:
            app.logger.error("Record store %r unavailable: %s", app.config.get("STORE_BACKEND"), e)
            app.logger.error("Fix the storage configuration and restart the server.")
            raise SystemExit(1)
        app.logger.info("Record store ready: %s", info)

        if app.config.get("SEED_DEMO") and seed_demo_data(store):
            app.logger.info("Seeded demo data")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(StorageError)
    def handle_storage_error(e):
        app.logger.exception("Record store failure")
        return jsonify({"error": str(e)}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        app.logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500
