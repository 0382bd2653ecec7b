from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .allowances.controller import register as register_allowances
from .container import Container, build_container
from .database.bootstrap import initialize_database
from .expenses.controller import register as register_expenses
from .projects.controller import register as register_projects
from .timesheets.controller import register as register_timesheets
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(level: Optional[str], debug: bool) -> None:
    level = level or ("DEBUG" if debug else "INFO")
    logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)s [%(name)s] %(message)s")


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    A prebuilt ``container`` skips all database setup (used by tests).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", None), app.config["DEBUG"])

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        auto_init = bool(getattr(settings, "AUTO_INIT_DB", False))
        auto_seed = bool(getattr(settings, "AUTO_SEED_DB", False))
        if auto_init or auto_seed:
            initialize_database(db_config, schema=auto_init, seed=auto_seed)

        container = build_container(db_config=db_config)

    register_users(app, container)
    register_allowances(app, container)
    register_expenses(app, container)
    register_projects(app, container)
    register_timesheets(app, container)

    return app
