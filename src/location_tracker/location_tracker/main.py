from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import now_utc, to_iso_utc
from .common.responses import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import TableNames
from .demo_data import seed_demo_data
from .employees.controller import register as register_employees
from .locations.controller import register as register_locations

logger = logging.getLogger(__name__)

SERVICE_NAME = "Employee Location Tracker API"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    store_backend = str(getattr(settings, "STORE_BACKEND", "mysql"))
    db_config = getattr(settings, "DB_CONFIG", None)
    tables = getattr(settings, "TABLES", None)

    logger.info("settings=%s store=%s", settings_module, store_backend)

    if store_backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, TableNames.from_mapping(tables))
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = container or build_container(
        store_backend=store_backend,
        db_config=db_config,
        tables=tables,
        default_password=str(getattr(settings, "DEFAULT_PASSWORD", "12345")),
    )

    register_error_handlers(app)
    _register_service_routes(app)
    register_employees(app, container)
    register_locations(app, container)
    register_attendance(app, container)

    if bool(getattr(settings, "ENABLE_SEED_ENDPOINT", False)):

        @app.route("/api/seed-test-data", methods=["POST"], endpoint="seed_test_data")
        def seed_test_data():
            result = seed_demo_data(container)
            return jsonify(
                {
                    "success": True,
                    "message": "Test data seeded successfully",
                    "employees": result.employees,
                    "locations": result.locations,
                }
            )

    return app


def _register_service_routes(app: Flask) -> None:
    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "healthy", "timestamp": to_iso_utc(now_utc()), "service": SERVICE_NAME})

    @app.route("/api/test", endpoint="api_test")
    def api_test():
        return jsonify({"message": "API is working!", "timestamp": to_iso_utc(now_utc()), "status": "online"})

    @app.route("/api", endpoint="api_index")
    def api_index():
        endpoints = sorted(
            {rule.rule for rule in app.url_map.iter_rules() if rule.rule.startswith("/api")}
        )
        return jsonify(
            {
                "message": "API Server is running",
                "timestamp": to_iso_utc(now_utc()),
                "status": "online",
                "endpoints": endpoints,
            }
        )
