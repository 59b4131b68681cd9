from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .container import Container, build_container
from .core.settings import Settings, load_settings
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .employees.controller import register as register_employees
from .uploads.controller import register as register_uploads
from .users.controller import register as register_users

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def load_app_settings() -> Settings:
    load_dotenv(override=False)
    return load_settings(importlib.import_module(get_settings_module()))


def create_app(container: Optional[Container] = None) -> Flask:
    settings = container.settings if container else load_app_settings()

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    app = Flask(__name__)
    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = settings.testing
    app.config["MAX_CONTENT_LENGTH"] = settings.max_content_length
    app.logger.setLevel(settings.log_level)

    if container is None:
        if settings.auto_init_db:
            db_config = DBConfig.from_url(settings.database_url)
            apply_schema(db_config)
            app.logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(settings)
        if container.conn is not None:
            app.logger.info("Using database %s", container.conn.config.safe_repr())

    app.extensions["employee_directory"] = container
    register_error_handlers(app)

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return "Server is up and running"

    register_users(app, container)
    register_employees(app, container)
    register_uploads(app, container)

    return app
