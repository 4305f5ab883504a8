from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .common.http import error_response
from .config import get_settings_module
from .container import build_container
from .core.constants import DEFAULT_TIMEZONE
from .core.exceptions import DomainError
from .core.logging_config import setup_logging
from .reports.workbook import ExcelReportWriter

from .absences.controller import register as register_absences
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def create_app(*, settings_module: Optional[str] = None, **repositories) -> Flask:
    """Build the Flask app on top of the given repositories.

    ``repositories`` are the keyword arguments of ``build_container`` except
    ``report_writer``, which is configured from settings.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEFAULT_TIMEZONE"] = getattr(settings, "DEFAULT_TIMEZONE", DEFAULT_TIMEZONE)

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    logger.info("Starting punchly with settings %s", settings_module)

    report_writer = ExcelReportWriter(password=getattr(settings, "REPORT_PROTECTION_PASSWORD", "") or None)
    container = build_container(report_writer=report_writer, **repositories)
    app.extensions["punchly"] = container

    # Parse errors raised by the controllers before a service is called.
    app.register_error_handler(DomainError, error_response)

    register_employees(app, container)
    register_absences(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
