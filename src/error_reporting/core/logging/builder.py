# src/error_reporting/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration from Settings.

This module:
 - builds a dictConfig-compatible mapping from Settings (make_dict_config)
 - applies it and creates LOG_DIR when logging to files (setup_logging)

Configuration knobs (on your Settings object):
 - LOG_TO_STDOUT, LOG_DIR, LOG_FORMAT, LOG_LEVEL, LOG_MAX_BYTES, LOG_BACKUP_COUNT, ENV
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config

from error_reporting.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    CONSOLE_LOGGER,
    get_console_handler,
    get_report_handler,
    get_file_handler,
    get_error_file_handler,
)

# Settings type (avoid calling get_settings() here to prevent import-time side effects)
from error_reporting.config.settings import Settings  # type: ignore


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (colour in text mode) and "json"
      - filters: "request_id", "redact"
      - handlers: console, plus file/error_file when LOG_TO_STDOUT is off, and
        "reports" for the Reporter console fallback
      - loggers: root, uvicorn.error, uvicorn.access, sentry_sdk.errors and
        CONSOLE_LOGGER (DEBUG, not propagated)
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    root_handlers = list(handlers.keys())
    handlers["reports"] = get_report_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": root_handlers,
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": root_handlers,
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            # transport problems of the Sentry SDK; its debug chatter stays off
            "sentry_sdk.errors": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
            CONSOLE_LOGGER: {
                "level": "DEBUG",
                "handlers": ["reports"] + [name for name in root_handlers if name != "console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging using settings.

    Steps:
      1. Ensure LOG_DIR exists when writing files.
      2. Apply dictConfig(make_dict_config(settings)).
      3. Register a RequestIdFilter on the root logger as a safety net.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    logging.getLogger().addFilter(RequestIdFilter())
