# src/error_reporting/api/error_handlers.py
"""
FastAPI / Starlette error middleware: report caught errors and turn them into JSON responses.

How to use:
    - Call register_error_handler(app) from your app factory (reads SENTRY_DSN /
      SENTRY_ENVIRONMENT from Settings), or build the handler yourself with
      create_error_middleware(dsn, environment) and register it.
    - Raise HttpError for planned failures (reported at info); anything else is an
      unplanned failure (reported at error, answered with 500).

Registered for `Exception`, the handler runs inside Starlette's ServerErrorMiddleware,
the outermost layer: Starlette sends the handler's response and then re-raises the
original exception so the server can log it. Registered for `HttpError`, it runs in
ExceptionMiddleware and nothing is re-raised.
"""

import logging

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from error_reporting.config.settings import Settings, get_settings
from error_reporting.exceptions.base import ErrorMiddlewareFailure, HttpError
from error_reporting.reporting.backends import SentryBackend
from error_reporting.reporting.reporter import Reporter, get_console_logger, report

from .request_context import capture_request, sanitize_request

logger = logging.getLogger(__name__)

FALLBACK_BODY = {"error": "Internal Server Error"}


def error_message(exc: BaseException) -> str:
    """The message an exception was raised with (KeyError("id") -> "id", not "'id'")."""
    if len(exc.args) == 1 and isinstance(exc.args[0], str):
        return exc.args[0]
    return str(exc)


def build_response(exc: Exception) -> JSONResponse:
    """
    HttpError -> its status, headers and body.
    Anything else -> 500 with {"error": "<message>"}.
    """
    if isinstance(exc, HttpError):
        response = JSONResponse(status_code=exc.status, content=exc.body)
        for key, value in exc.headers.items():
            response.headers[key] = value
        return response
    return JSONResponse(status_code=500, content={"error": error_message(exc)})


def create_error_middleware(
    access_token: str | None = None,
    environment: str = "production",
    *,
    reporter: Reporter | None = None,
    backend_factory=SentryBackend,
):
    """
    Configure error reporting and return a Starlette exception handler.

    Args:
        access_token: Sentry DSN. Without it, reports go to the console (logging).
        environment: environment label attached to every Sentry event.
        reporter: Reporter to configure and report through; defaults to the
                  process-wide `report`.
        backend_factory: callable(access_token, environment) -> backend.

    Returns:
        async handler(request, exc) -> Response, for app.add_exception_handler().
    """
    reporter = report if reporter is None else reporter

    if access_token:
        reporter.configure(backend_factory(access_token, environment))
        get_console_logger().info("Connecting to Sentry [environment=%s]", environment)
    else:
        get_console_logger().info("No Sentry DSN is set. Errors will go to the console")

    async def error_handler(request: Request, exc: Exception) -> Response:
        snapshot = None
        try:
            # 1) Request data, cleaned up for the tracker
            snapshot = sanitize_request(capture_request(request))

            # 2) Planned errors at info, unplanned at error
            options = {"custom": getattr(exc, "custom", None)}
            if isinstance(exc, HttpError):
                reporter.info(exc, snapshot, options)
            else:
                reporter.error(exc, snapshot, options)

            # 3) Response
            return build_response(exc)
        except Exception as failure:
            # Handling the error failed. Whatever is raised from here on reaches
            # Starlette's ServerErrorMiddleware instead of a response.
            wrapped = ErrorMiddlewareFailure(failure)
            logger.error("%s", wrapped, exc_info=wrapped)
            if reporter.backend is not None:
                context = (snapshot,) if snapshot is not None else ()
                reporter.backend.error(wrapped, *context)
            return JSONResponse(status_code=500, content=dict(FALLBACK_BODY))

    return error_handler


def register_error_handler(app: FastAPI, settings: Settings | None = None, *, reporter: Reporter | None = None):
    """
    Build the error handler from settings and register it on `app` for HttpError
    and for every other Exception. Returns the handler.
    """
    settings = settings if settings is not None else get_settings()
    handler = create_error_middleware(
        settings.SENTRY_DSN,
        settings.SENTRY_ENVIRONMENT,
        reporter=reporter,
    )
    app.add_exception_handler(HttpError, handler)
    app.add_exception_handler(Exception, handler)
    return handler


"""
---------------------------------------------------------
Register the handler in your FastAPI app (example):
---------------------------------------------------------
```
from fastapi import FastAPI
from error_reporting import register_error_handler
from error_reporting.core.logging import RequestIDMiddleware, setup_logging
from error_reporting.config import get_settings

def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings)

    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)
    register_error_handler(app, settings)
    return app
```

Route raising a planned error:
```
from error_reporting import HttpError

@app.get("/conversations/{conversation_id}")
async def get_conversation(conversation_id: str):
    raise HttpError.not_found("Conversation not found").with_custom({"conversation_id": conversation_id})
```

The client gets HTTP 404 and body:
```
{"error": "Conversation not found"}
```
and Sentry gets an info-level event with the request and a "custom" context.

To have the parsed payload reported with the request, store it on request.state.body:
```
@app.post("/orders")
async def create_order(request: Request, payload: OrderIn):
    request.state.body = payload.model_dump()
    ...
```
"""
