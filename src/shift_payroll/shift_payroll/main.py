from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import build_container
from .core.enums import StorageBackend
from .core.error_handlers import register_error_handlers
from .database.bootstrap import apply_schema, list_tables
from .locations.controller import register as register_locations
from .members.controller import register as register_members
from .notifications.notifier import build_notifier
from .payroll.controller import register as register_payroll
from .shifts.controller import register as register_shifts

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

logger = logging.getLogger(__name__)


def _load_settings(overrides: Optional[dict[str, Any]]) -> dict[str, Any]:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = {k: getattr(module, k) for k in dir(module) if k.isupper()}
    settings["SETTINGS_MODULE"] = settings_module
    settings.update(overrides or {})
    return settings


def create_app(settings_overrides: Optional[dict[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(settings_overrides)

    logging.basicConfig(level=str(settings.get("LOG_LEVEL", "INFO")).upper(), format=LOG_FORMAT)

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))

    storage = str(settings.get("STORAGE", StorageBackend.MEMORY.value))
    db_config = dict(settings.get("DB_CONFIG") or {})
    logger.info("Starting shift-payroll (settings=%s, storage=%s)", settings["SETTINGS_MODULE"], storage)

    notifier = build_notifier(
        settings.get("SLACK_WEBHOOK_URL"),
        timeout=float(settings.get("NOTIFY_TIMEOUT_SECONDS", 5.0)),
    )
    container = build_container(storage=storage, db_config=db_config, notifier=notifier)
    app.extensions["container"] = container

    if container.conn is not None and settings.get("AUTO_INIT_DB"):
        apply_schema(container.conn)
        logger.info("Schema ready (tables=%d)", len(list_tables(container.conn)))

    register_error_handlers(app)
    register_members(app, container)
    register_locations(app, container)
    register_attendance(app, container)
    register_shifts(app, container)
    register_payroll(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "storage": storage})

    return app
