# src/error_reporting/core/logging/handlers.py
"""
Handler factories for logging.dictConfig.

Each function returns a handler configuration dict; builder.py registers them under
"console", "reports", "file" or "error_file". The "request_id" and "redact"
filters must be declared in the same dictConfig (builder.py does this).
"""

from pathlib import Path

from error_reporting.config.settings import Settings

# Logger the Reporter writes its console fallback to. It is kept at DEBUG so every
# report level reaches the console whatever LOG_LEVEL says.
CONSOLE_LOGGER = "error_reporting.console"


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    """Console/stream handler. Writes to stderr (StreamHandler default)."""
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": ["request_id", "redact"],
    }


def get_report_handler(settings: Settings) -> dict:
    """Stream handler dedicated to CONSOLE_LOGGER; accepts every level."""
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": "DEBUG",
        "filters": ["request_id", "redact"],
    }


def get_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filename": str(Path(settings.LOG_DIR) / "app.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": ["request_id", "redact"],
    }


# Errors get their own structured file for alerting/archival.
def get_error_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",
        "level": "ERROR",
        "filename": str(Path(settings.LOG_DIR) / "errors.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": ["request_id", "redact"],
    }
