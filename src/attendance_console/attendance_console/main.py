from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .accounts.controller import register as register_accounts
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_EXPORT_DATE_FORMAT, DEFAULT_PAGE_SIZE, DEFAULT_SESSION_HOURS
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_user, list_tables
from .employees.controller import register as register_employees
from .leave.controller import register as register_leave
from .roster.controller import register as register_roster
from .shifts.controller import register as register_shifts

logger = logging.getLogger("attendance_console")

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app; pass a ready `container` to skip database wiring (tests)."""

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        if app.config["DEBUG"]:
            logger.info(
                "settings=%s db=%s@%s:%s/%s",
                settings_module,
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("port", 3306),
                db_config.get("database"),
            )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_admin_user(
                db_config,
                email=getattr(settings, "ADMIN_EMAIL", "admin@example.com"),
                password=getattr(settings, "ADMIN_PASSWORD", "admin123"),
            )
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            session_hours=int(getattr(settings, "SESSION_HOURS", DEFAULT_SESSION_HOURS)),
            page_size=int(getattr(settings, "ATTENDANCE_PAGE_SIZE", DEFAULT_PAGE_SIZE)),
            export_date_format=getattr(settings, "EXPORT_DATE_FORMAT", DEFAULT_EXPORT_DATE_FORMAT),
        )

    register_accounts(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_shifts(app, container)
    register_roster(app, container)
    register_leave(app, container)
    register_dashboard(app, container)

    return app


if __name__ == "__main__":
    create_app().run()
