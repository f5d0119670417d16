from __future__ import annotations

import asyncio
import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .branches.controller import register as register_branches
from .cards.controller import register as register_cards
from .common.web import register_error_handlers
from .container import Container, build_container, build_storage
from .database.bootstrap import apply_schema, list_keys
from .database.connection import DBConfig, DatabaseConnection
from .employees.controller import register as register_employees
from .holidays.controller import register as register_holidays
from .payroll.controller import register as register_payroll
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .storage.kv import KeyValueStorage
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(*, storage: KeyValueStorage | None = None) -> Flask:
    """Application factory.

    `storage` overrides the backend chosen by settings (tests pass an
    in-memory store).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db_config = dict(getattr(settings, "DB_CONFIG", {}))
    backend = str(getattr(settings, "STORAGE_BACKEND", "memory"))
    if storage is None:
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
            apply_schema(conn)
            logger.info("[db] schema ready (keys=%s)", len(list_keys(conn)))
        storage = build_storage(backend=backend, db_config=db_config)

    logger.info("[app] settings=%s storage=%s", settings_module, type(storage).__name__)

    container = build_container(storage=storage)
    asyncio.run(container.state.load())
    app.extensions["rfid_attendance"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_employees(app, container)
    register_cards(app, container)
    register_branches(app, container)
    register_holidays(app, container)
    register_settings(app, container)
    register_payroll(app, container)
    register_reports(app, container)

    return app


def get_container(app: Flask) -> Container:
    return app.extensions["rfid_attendance"]
