"""
Core pytest configuration for the entire test suite.

Provides:
  - recording / exploding reporting backends (stand-ins for Sentry)
  - Settings instances for the "development" and "test" environment modes
  - a Reporter wired to a recording backend
  - `isolated_logging` to undo setup_logging()/dictConfig changes made by a test
"""

from __future__ import annotations

import logging

# -------------------------------
# Early logging tuning
# -------------------------------
# Keep third-party chatter out of captured logs.
NOISY_LOGGERS = (
    "asyncio",
    "httpx",
    "urllib3",
    "sentry_sdk",
    "sentry_sdk.errors",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest

from error_reporting.config.settings import Settings
from error_reporting.core.logging.handlers import CONSOLE_LOGGER
from error_reporting.reporting.reporter import Reporter


class RecordingBackend:
    """Backend double that records every call as (operation, value, context)."""

    def __init__(self):
        self.calls: list[tuple[str, object, tuple]] = []

    def debug(self, value, *context):
        self.calls.append(("debug", value, context))

    def info(self, value, *context):
        self.calls.append(("info", value, context))

    def warning(self, value, *context):
        self.calls.append(("warning", value, context))

    def error(self, value, *context):
        self.calls.append(("error", value, context))

    @property
    def operations(self) -> list[str]:
        return [call[0] for call in self.calls]


class ExplodingBackend:
    """Backend double whose every operation fails, like an unreachable tracker SDK."""

    def _fail(self, value, *context):
        raise ConnectionError("tracker unreachable")

    debug = info = warning = error = _fail


@pytest.fixture
def dev_settings() -> Settings:
    return Settings(ENV="development", SENTRY_DSN=None)


@pytest.fixture
def test_mode_settings() -> Settings:
    return Settings(ENV="test", SENTRY_DSN=None)


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def exploding_backend() -> ExplodingBackend:
    return ExplodingBackend()


@pytest.fixture
def reporter(backend: RecordingBackend, dev_settings: Settings) -> Reporter:
    return Reporter(backend, settings=dev_settings)


@pytest.fixture
def console_reporter(dev_settings: Settings) -> Reporter:
    """Reporter without a backend: reports go through the console fallback."""
    return Reporter(settings=dev_settings)


@pytest.fixture
def isolated_logging():
    """
    Snapshot the root and console-report loggers and restore them after the test,
    so handlers bound to a test's captured stderr do not outlive it.
    """
    root = logging.getLogger()
    console = logging.getLogger(CONSOLE_LOGGER)
    handlers, level, filters = list(root.handlers), root.level, list(root.filters)
    console_handlers, console_propagate = list(console.handlers), console.propagate
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    root.filters[:] = filters
    console.handlers[:] = console_handlers
    console.propagate = console_propagate
    console.setLevel(logging.DEBUG)
