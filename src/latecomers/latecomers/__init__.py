"""Late-comers tracker package.

Organized by feature modules (ledger, archive, maintenance, reports) with a
thin Flask controller layer over service/repository layers backed by MongoDB.
"""
from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_indexes, ensure_demo_accounts
from .archive.controller import register as register_archive
from .auth.controller import register as register_auth
from .ledger.controller import register as register_ledger
from .maintenance.controller import register as register_maintenance
from .reports.controller import register as register_reports


def load_settings():
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def configure_logging(settings) -> None:
    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    settings = load_settings()
    configure_logging(settings)

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        container = build_container(settings=settings)

        if app.config["DEBUG"]:
            app.logger.info(
                "[late-comers] settings=%s db=%s", get_settings_module(), container.conn.database_name
            )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_indexes(container.conn)
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_accounts(container.conn)
            app.logger.info("[late-comers] demo seed ready")

    app.extensions["late_comers"] = container

    register_auth(app, container)
    register_ledger(app, container)
    register_archive(app, container)
    register_reports(app, container)
    register_maintenance(app, container)

    return app
