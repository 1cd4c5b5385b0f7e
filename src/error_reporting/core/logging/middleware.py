# src/error_reporting/core/logging/middleware.py
"""
Request ID middleware for FastAPI / Starlette.

Each incoming request gets a request id:
  - the incoming `X-Request-ID` header when it is a valid UUID,
  - otherwise a fresh UUID4.

The id is stored in the contextvar read by RequestIdFilter (so log lines carry it),
and on `request.state.request_id`, and echoed in the `X-Request-ID` response header.
The error middleware copies it into the RequestSnapshot it reports, so a Sentry event
can be matched with the log lines of the same request.

Register it before routers:
    app.add_middleware(RequestIDMiddleware)
"""

import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"


def _valid_request_id(value: str | None) -> str | None:
    # only accept UUIDs from upstream: arbitrary header values end up in logs
    if not value:
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Starlette / FastAPI middleware that sets a request id for each incoming request.
    """

    async def dispatch(self, request: Request, call_next):
        rid = _valid_request_id(request.headers.get(REQUEST_ID_HEADER)) or str(uuid.uuid4())

        token = set_request_id(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
