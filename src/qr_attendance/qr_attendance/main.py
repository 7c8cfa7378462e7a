from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module, load_settings

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_accounts, list_tables
from .users.controller import register as register_users

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _configure_logging(app: Flask, level_name: str) -> None:
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    app.logger.setLevel(level)


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    """Application factory.

    ``container`` lets callers (tests, scripts) supply their own repositories;
    by default a MySQL-backed container is built from the settings' DB_CONFIG.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = load_settings(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_KEY"] = getattr(settings, "SESSION_KEY", "currentUser")
    _configure_logging(app, getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_accounts(db_config)
            app.logger.info("demo accounts ready")

        container = build_container(db_config=db_config)

    app.extensions["qr_attendance"] = container

    register_users(app, container)
    register_attendance(app, container)

    return app
