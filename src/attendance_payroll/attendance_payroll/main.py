from __future__ import annotations

import importlib
import logging
import logging.config
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .audit.controller import register as register_audit
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables, seed_demo_data
from .holidays.controller import register as register_holidays
from .payroll.controller import register as register_payroll
from .requests.controller import register as register_requests
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"},
            },
            "handlers": {
                "console": {"class": "logging.StreamHandler", "formatter": "standard"},
            },
            "root": {"handlers": ["console"], "level": str(level).upper()},
        }
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "Settings %s, database %s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_demo_data(db_config)

        container = build_container(
            db_config=db_config,
            strict_break_ordering=bool(getattr(settings, "STRICT_BREAK_ORDERING", True)),
            default_company_id=getattr(settings, "DEFAULT_COMPANY_ID", None),
        )

    register_users(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_requests(app, container)
    register_holidays(app, container)
    register_audit(app, container)

    return app
