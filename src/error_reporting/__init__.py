"""
HTTP error type, reporting facade and FastAPI error middleware.

    from error_reporting import HttpError, report, create_error_middleware, register_error_handler
"""

from .exceptions import HttpError, InvalidHttpErrorArgument, ErrorMiddlewareFailure
from .reporting import Reporter, report, SentryBackend
from .api.error_handlers import create_error_middleware, register_error_handler

__all__ = [
    "HttpError",
    "InvalidHttpErrorArgument",
    "ErrorMiddlewareFailure",
    "Reporter",
    "report",
    "SentryBackend",
    "create_error_middleware",
    "register_error_handler",
]
