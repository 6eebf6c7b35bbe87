from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .reports.controller import register as register_reports
from .users.controller import register as register_users
from .worklogs.controller import register as register_worklogs

logger = logging.getLogger(__name__)


def create_app(settings: Any = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    if settings is None:
        settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    container = container or build_container(settings)
    logger.info(
        "Work Tracker starting (settings=%s, storage=%s, ai=%s)",
        getattr(settings, "__name__", settings_module),
        type(container.store).__name__,
        "on" if container.enrichment_service.enabled else "off",
    )

    register_users(app, container)
    register_worklogs(app, container)
    register_reports(app, container)

    return app
