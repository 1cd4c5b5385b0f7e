# src/error_reporting/core/logging/filters.py
"""
Logging filters

Request ID filter, redaction filter and contextvar helpers.

- RequestIdFilter guarantees every LogRecord has a `request_id` attribute so
  formatters referencing `%(request_id)s` never KeyError. The id comes from a
  contextvar set by RequestIDMiddleware; "-" when nothing is set.
- RedactFilter masks sensitive attributes attached via `extra={...}`, including
  values nested one level down in mappings (e.g. a request's headers).

We use `contextvars.ContextVar` rather than `threading.local()` because Starlette
serves many requests per thread; the contextvar follows each request across awaits.
"""

import logging
from collections.abc import Mapping
from logging import LogRecord
import contextvars

# Default is None to indicate "no request id set".
_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    """
    Reset the contextvar to the previously saved token returned by set_request_id().
    """
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    """
    Retrieve the current context's request id, or None when no id has been set.
    """
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Logging filter that guarantees every LogRecord has a `request_id` attribute.

    Precedence: an explicit `extra={"request_id": ...}`, then the contextvar, then "-".
    Always returns True; it annotates, it never drops.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


REDACTED = "***REDACTED***"


class RedactFilter(logging.Filter):
    """
    Mask sensitive values attached to a LogRecord.

    Top-level attributes whose name is sensitive are replaced, and so are sensitive
    keys of mapping attributes (a copy is made, the caller's mapping is left alone).
    """

    SENSITIVE = {
        "password", "secret", "token", "access_token", "refresh_token", "ssn",
        "authorization", "cookie", "set-cookie", "x-api-key", "dsn",
    }

    def filter(self, record: LogRecord) -> bool:
        for key, value in list(record.__dict__.items()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = REDACTED
            elif isinstance(value, Mapping):
                record.__dict__[key] = self._redact_mapping(value)
        return True

    def _redact_mapping(self, mapping: Mapping) -> Mapping:
        if not any(str(k).lower() in self.SENSITIVE for k in mapping):
            return mapping
        return {
            k: (REDACTED if str(k).lower() in self.SENSITIVE else v)
            for k, v in mapping.items()
        }
