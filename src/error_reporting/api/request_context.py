# src/error_reporting/api/request_context.py
"""
Build and sanitize the request data attached to error reports.

Starlette requests are immutable and their body stream is usually consumed by the time
an exception handler runs, so reports carry a RequestSnapshot instead:

  - method / url / query_string / headers come from the request
  - body is whatever the application stored on `request.state.body` (e.g. a route
    dependency keeping the parsed payload); absent otherwise
  - request_id comes from RequestIDMiddleware (request.state or the logging contextvar)
"""

from collections.abc import Mapping

from starlette.datastructures import URL
from starlette.requests import Request

from ..core.logging.filters import get_request_id
from ..reporting.snapshot import RequestSnapshot

_MISSING = object()


def capture_request(request: Request) -> RequestSnapshot:
    snapshot = RequestSnapshot(
        method=request.method,
        url=str(request.url),
        query_string=request.url.query,
        headers=dict(request.headers),
    )

    body = getattr(request.state, "body", _MISSING)
    if body is not _MISSING:
        snapshot["body"] = body

    request_id = getattr(request.state, "request_id", None) or get_request_id()
    if request_id:
        snapshot["request_id"] = request_id

    return snapshot


def sanitize_request(snapshot: RequestSnapshot) -> RequestSnapshot:
    """
    Clean up a snapshot in place before it is reported, and return it.

    1. A GET carrying an empty parsed body ({}) is body-parser noise: drop the body.
    2. Behind a reverse proxy, report the public host: keep the original Host header
       as x-real-host, then use X-Forwarded-Host for the Host header and the URL.
    """
    body = snapshot.get("body", _MISSING)
    if snapshot.get("method") == "GET" and isinstance(body, Mapping) and not body:
        del snapshot["body"]

    headers = snapshot.get("headers")
    forwarded_host = headers.get("x-forwarded-host") if headers else None
    if forwarded_host:
        headers["x-real-host"] = headers.get("host")
        headers["host"] = forwarded_host
        if snapshot.get("url"):
            snapshot["url"] = str(URL(snapshot["url"]).replace(netloc=forwarded_host))

    return snapshot
