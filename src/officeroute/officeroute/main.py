from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .insights.controller import register as register_insights
from .sync.controller import register as register_sync
from .users.controller import register as register_users

SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "LOG_LEVEL",
    "DATABASE_URL",
    "CLOUD_URL",
    "SYNC_PROVIDER_DOMAIN",
    "SYNC_TIMEOUT_SECONDS",
    "POSITION_TIMEOUT_SECONDS",
    "AUTO_SYNC",
    "LATE_AFTER_HOUR",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "BOOTSTRAP_ADMIN_PASSWORD",
    "BOOTSTRAP_EMPLOYEE_PASSWORD",
)


def load_settings(overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    settings_module = importlib.import_module(get_settings_module())
    settings = {name: getattr(settings_module, name) for name in SETTING_NAMES if hasattr(settings_module, name)}
    settings.update(overrides or {})
    return settings


def create_app(settings_overrides: Optional[dict[str, Any]] = None, *, http_session=None) -> Flask:
    load_dotenv(override=False)
    settings = load_settings(settings_overrides)

    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger = logging.getLogger("officeroute")

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))

    container = build_container(settings=settings, http_session=http_session)
    app.extensions["officeroute"] = container
    logger.info("database %s, auto sync %s", container.db.engine.url, "on" if settings.get("AUTO_SYNC", True) else "off")

    register_attendance(app, container)
    register_users(app, container)
    register_sync(app, container)
    register_insights(app, container)

    return app
