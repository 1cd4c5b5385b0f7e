# src/error_reporting/reporting/reporter.py
"""
Reporting facade: four severity-levelled operations that either forward to a remote
error tracker or fall back to console output.

    from error_reporting import report

    report.info({"event": "cache warmed", "entries": 1200})
    report.error(exc, {"custom": {"order_id": 42}})

Decision order for every call:
  1. Settings.is_test_mode (ENV=test, any casing)  -> do nothing
  2. a backend is configured                        -> backend.<operation>(value, *context)
  3. otherwise                                      -> log to the "error_reporting.console"
                                                       logger (always DEBUG):
        - exceptions are rendered by the traceback formatter
        - anything else as "[<operation>]: <indented JSON>" (repr when not serializable)

Only the first value is rendered on the console path; context values are meant for
the tracker.
"""

import json
import logging
from typing import Any

from ..config.settings import Settings, get_settings
from ..core.logging.handlers import CONSOLE_LOGGER
from .backends import ReportingBackend
from .pretty import PrettyTracebackFormatter, TracebackFormatter

console = logging.getLogger(CONSOLE_LOGGER)
console.setLevel(logging.DEBUG)

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def get_console_logger() -> logging.Logger:
    """
    Logger for console fallback output.

    When nothing is configured (no handler on it or its ancestors), a stderr handler
    is attached, since the last-resort handler only prints WARNING and above.
    setup_logging() replaces it with the "reports" handler.
    """
    if not console.hasHandlers():
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        console.addHandler(handler)
    return console


class Reporter:
    """
    Holds the (optional) backend handle and dispatches the four operations.

    - backend: remote tracker, or None for the console fallback
    - settings: Settings to read the environment mode from; defaults to get_settings()
      looked up on every call
    - formatter: traceback formatter for the console fallback; built lazily from
      Settings.TRACEBACK_SUPPRESS on first use
    """

    def __init__(
        self,
        backend: ReportingBackend | None = None,
        *,
        settings: Settings | None = None,
        formatter: TracebackFormatter | None = None,
    ):
        self.backend = backend
        self._settings = settings
        self._formatter = formatter

    @property
    def settings(self) -> Settings:
        return self._settings if self._settings is not None else get_settings()

    @property
    def formatter(self) -> TracebackFormatter:
        if self._formatter is None:
            self._formatter = PrettyTracebackFormatter(self.settings.TRACEBACK_SUPPRESS)
        return self._formatter

    @property
    def configured(self) -> bool:
        return self.backend is not None

    def configure(self, backend: ReportingBackend | None) -> None:
        """Install (or replace) the backend handle."""
        self.backend = backend

    # ------------------------
    # Reporting operations
    # ------------------------
    def debug(self, value: Any, *context: Any) -> None:
        self._dispatch("debug", value, *context)

    def info(self, value: Any, *context: Any) -> None:
        self._dispatch("info", value, *context)

    def warning(self, value: Any, *context: Any) -> None:
        self._dispatch("warning", value, *context)

    def error(self, value: Any, *context: Any) -> None:
        self._dispatch("error", value, *context)

    def _dispatch(self, operation: str, value: Any, *context: Any) -> None:
        if self.settings.is_test_mode:
            return

        if self.backend is not None:
            getattr(self.backend, operation)(value, *context)
            return

        get_console_logger().log(LOG_LEVELS[operation], "%s", self.render(operation, value))

    def render(self, operation: str, value: Any) -> str:
        """Console text for `value` (used when no backend is configured)."""
        if isinstance(value, BaseException):
            return self.formatter.render(value)
        try:
            text = json.dumps(value, indent=2, default=str)
        except (TypeError, ValueError):
            # non-string keys, circular references
            text = repr(value)
        return f"[{operation}]: {text}"


# Process-wide default, configured by create_error_middleware()
report = Reporter()
