from __future__ import annotations

import importlib
import logging
from datetime import datetime
from typing import Optional

import mysql.connector
from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import DomainError, StoreUnavailableError
from .database.bootstrap import apply_schema
from .members.controller import register as register_members
from .payments.controller import register as register_payments
from .plans.controller import register as register_plans

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def domain_error(e: DomainError):
        if isinstance(e, StoreUnavailableError):
            logger.error("%s %s failed: %s", request.method, request.path, e)
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def unexpected_error(e: Exception):
        app.logger.exception("unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return jsonify({"error": f"Internal server error: {e}"}), 500
        return jsonify({"error": "Internal server error"}), 500


def _register_store_guard(app: Flask, container: Container) -> None:
    @app.before_request
    def require_store():
        if not request.path.startswith("/api"):
            return None
        if container.conn.is_available() or container.conn.open():
            return None
        return jsonify({"error": "Service unavailable: database not connected"}), 503

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify(
            {
                "status": "OK",
                "timestamp": datetime.now().isoformat(),
                "database": container.conn.is_available(),
            }
        )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PORT"] = int(getattr(settings, "PORT", 3000))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(
            db_config=db_config,
            require_active_subscription=bool(getattr(settings, "REQUIRE_ACTIVE_SUBSCRIPTION", False)),
        )
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module, db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            try:
                apply_schema(container.conn.config)
            except mysql.connector.Error as e:
                # Run degraded: /api answers 503 until the database comes back.
                logger.error("schema bootstrap skipped, database unreachable: %s", e)

        if not container.conn.open():
            logger.warning("continuing without database; API routes return 503 until it is available")

    app.extensions["container"] = container

    _register_error_handlers(app)
    _register_store_guard(app, container)
    register_members(app, container)
    register_plans(app, container)
    register_payments(app, container)
    register_attendance(app, container)

    return app


def run() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=app.config["DEBUG"])


if __name__ == "__main__":
    run()
