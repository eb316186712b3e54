from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_utils import configure_logging
from .container import Container, build_container_from_settings
from .database.bootstrap import apply_schema

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(getattr(settings, "DB_CONFIG"), schema_path=schema_path)
            logger.info("Schema ready (%s)", schema_path)
        container = build_container_from_settings(settings)
        atexit.register(container.close)

    logger.info("App configured with settings=%s", settings_module)
    register_attendance(app, container)
    return app
