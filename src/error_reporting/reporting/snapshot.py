# src/error_reporting/reporting/snapshot.py
from typing import Any


class RequestSnapshot(dict):
    """
    Plain-dict view of the HTTP request an error happened in.

    Keys:
      - method, url, query_string: str
      - headers: dict with lower-case header names
      - body: parsed payload (only present when the application stored one)
      - request_id: correlation id (only present when RequestIDMiddleware set one)

    Being a dict keeps it JSON-serializable for the console fallback, while the
    subclass lets backends recognise it among free-form context values.
    """

    def to_sentry(self) -> dict[str, Any]:
        """Return the snapshot shaped as a Sentry event `request` interface."""
        request: dict[str, Any] = {
            "method": self.get("method"),
            "url": self.get("url"),
            "query_string": self.get("query_string", ""),
            "headers": dict(self.get("headers", {})),
        }
        if "body" in self:
            request["data"] = self["body"]
        return request
