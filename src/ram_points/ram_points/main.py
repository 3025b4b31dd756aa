from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .aggregation.controller import register as register_maintenance
from .attendance.controller import register as register_attendance
from .common.logging import configure_logging
from .container import Container, build_container
from .core.exceptions import (
    ConflictError,
    CounterDriftError,
    DomainError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from .database.bootstrap import create_schema, ensure_database_exists, list_tables
from .events.controller import register as register_events
from .members.controller import register as register_members

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
    (CounterDriftError, 409),
    (StoreError, 503),
)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                break
        else:
            status = 400
        if status >= 500:
            logger.exception("Request failed: %s", e)
        return jsonify({"error": type(e).__name__, "message": str(e)}), status


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        database_url = getattr(settings, "DATABASE_URL", None)
        auto_init_db = bool(getattr(settings, "AUTO_INIT_DB", False))

        if auto_init_db and not database_url:
            ensure_database_exists(db_config)

        container = build_container(
            db_config=db_config,
            database_url=database_url,
            email_domain=getattr(settings, "EMAIL_DOMAIN", "virginia.edu"),
            strict_counters=bool(getattr(settings, "STRICT_COUNTERS", False)),
        )
        if auto_init_db:
            create_schema(container.db)
            logger.info("Schema ready (tables=%s)", len(list_tables(container.db)))

    logger.info("Starting ram-points with settings=%s dialect=%s", settings_module, container.db.dialect_name)

    app.extensions["ram_points"] = container
    register_error_handlers(app)
    register_members(app, container)
    register_events(app, container)
    register_attendance(app, container)
    register_maintenance(app, container)

    return app
