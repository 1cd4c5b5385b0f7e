# src/error_reporting/reporting/backends.py
"""
Remote error-tracker backends.

A backend is any object exposing the four reporting operations:

    debug(value, *context)
    info(value, *context)
    warning(value, *context)
    error(value, *context)

The Reporter forwards its arguments verbatim to the operation with the same name.
Delivery (queueing, batching, retries) is the tracker SDK's business: calls here are
fire-and-forget and never awaited.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import sentry_sdk

from .snapshot import RequestSnapshot

logger = logging.getLogger(__name__)


class ReportingBackend(Protocol):
    def debug(self, value: Any, *context: Any) -> None: ...
    def info(self, value: Any, *context: Any) -> None: ...
    def warning(self, value: Any, *context: Any) -> None: ...
    def error(self, value: Any, *context: Any) -> None: ...


def _as_message(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


class SentryBackend:
    """
    Forward reports to Sentry.

    Construction initializes the Sentry SDK for the whole process
    (sentry_sdk.init), so build one backend per process.

    Context values are attached to the event as follows:
      - RequestSnapshot                -> the event's `request` interface
      - mapping with a "custom" key    -> a "custom" context (None is skipped);
                                          the mapping's other keys become extras
      - any other mapping              -> extras, one per key
      - anything else                  -> extra "context_<position>"
    """

    def __init__(self, dsn: str, environment: str = "production", **options: Any):
        sentry_sdk.init(dsn=dsn, environment=environment, **options)
        self.environment = environment

    def debug(self, value: Any, *context: Any) -> None:
        self.capture("debug", value, *context)

    def info(self, value: Any, *context: Any) -> None:
        self.capture("info", value, *context)

    def warning(self, value: Any, *context: Any) -> None:
        self.capture("warning", value, *context)

    def error(self, value: Any, *context: Any) -> None:
        self.capture("error", value, *context)

    def capture(self, level: str, value: Any, *context: Any) -> None:
        # new_scope() forks the current scope so context never leaks into other events
        with sentry_sdk.new_scope() as scope:
            scope.set_level(level)
            for position, item in enumerate(context):
                self._apply_context(scope, position, item)

            if isinstance(value, BaseException):
                sentry_sdk.capture_exception(value)
            else:
                sentry_sdk.capture_message(_as_message(value), level=level)

    @staticmethod
    def _apply_context(scope: Any, position: int, item: Any) -> None:
        if isinstance(item, RequestSnapshot):
            request = item.to_sentry()

            def attach_request(event, hint):
                event["request"] = request
                return event

            scope.add_event_processor(attach_request)
            if "request_id" in item:
                scope.set_tag("request_id", item["request_id"])
            return

        if isinstance(item, Mapping):
            for key, val in item.items():
                if key == "custom":
                    if val is not None:
                        scope.set_context("custom", dict(val))
                    continue
                scope.set_extra(str(key), val)
            return

        scope.set_extra(f"context_{position}", item)
