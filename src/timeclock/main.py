from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .anomalies.controller import register as register_anomalies
from .attendance.controller import register as register_attendance
from .common.http import json_error
from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import (
    DomainError,
    EmployeeNotFoundError,
    ReferentialIntegrityError,
    StorageUnavailableError,
    ValidationError,
)
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(exc):
        return json_error(str(exc), 400)

    @app.errorhandler(EmployeeNotFoundError)
    def _not_found(exc):
        return json_error(str(exc), 404)

    @app.errorhandler(ReferentialIntegrityError)
    def _conflict(exc):
        return json_error(str(exc), 409)

    @app.errorhandler(DomainError)
    def _domain(exc):
        return json_error(str(exc), 400)

    @app.errorhandler(StorageUnavailableError)
    def _storage(exc):
        logger.error("Storage unavailable: %s", exc)
        return json_error("Storage is temporarily unavailable. Please try again.", 503, retry=True)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(db_config=db_config, settings=settings)
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            logger.info("Schema ready (tables=%d)", len(list_tables(container.conn)))

    app.extensions["timeclock"] = container
    _register_error_handlers(app)

    register_employees(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_anomalies(app, container)

    return app
