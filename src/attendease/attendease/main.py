from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .logging_config import setup_logging
from .timetable.controller import register as register_timetable

logger = logging.getLogger(__name__)

SETTING_KEYS = ("MAX_PERIOD_MINUTES", "INSTRUCTOR_SCOPE", "ROOM_SCOPE", "CROSS_CLASS_CHECKS")


def _database_dir() -> Path:
    return Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    for key in SETTING_KEYS:
        if hasattr(settings, key):
            app.config[key] = getattr(settings, key)

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), log_dir=getattr(settings, "LOG_DIR", "logs"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_settings(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=_database_dir() / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=_database_dir() / "seed.sql")
            logger.info("demo seed ready")

        container = build_container(db_config=db_config, settings=app.config)

    app.extensions["attendease"] = container
    register_timetable(app, container)

    @app.get("/")
    def root():
        return jsonify({"success": True, "message": "ATTENDEASE timetable service is running"})

    return app
