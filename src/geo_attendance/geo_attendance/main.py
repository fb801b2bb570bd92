from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging import configure_logging, get_logger
from .container import Container, build_container
from .core.constants import DEFAULT_RADIUS_METERS, DEFAULT_TIME_LIMIT_MINUTES
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .sessions.controller import register as register_sessions

logger = get_logger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEFAULT_RADIUS_METERS"] = float(getattr(settings, "DEFAULT_RADIUS_METERS", DEFAULT_RADIUS_METERS))
    app.config["DEFAULT_TIME_LIMIT_MINUTES"] = int(
        getattr(settings, "DEFAULT_TIME_LIMIT_MINUTES", DEFAULT_TIME_LIMIT_MINUTES)
    )

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

    if container is None:
        database_dir = Path(__file__).resolve().parents[3] / "database"
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=database_dir / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=database_dir / "seed.sql")
            logger.info("demo seed ready")
        container = build_container(db_config=db_config)

    register_sessions(app, container)
    register_attendance(app, container)

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("unhandled error")
        return jsonify({"success": False, "error": "InternalError", "message": "Internal server error"}), 500

    @app.route("/health", endpoint="health")
    def health():
        return "OK", 200

    return app
