"""
Custom exceptions for HTTP-mapped errors and the error middleware.
"""

from collections.abc import Mapping
from typing import Any

from ..validators.exception_validators import check_headers, check_mapping, check_status


class InvalidHttpErrorArgument(TypeError):
    """
    Raised when an HttpError is constructed with arguments of the wrong type.

    This is a programmer error: it is raised synchronously at the construction site
    and is not meant to be caught.
    """
    pass


class ErrorMiddlewareFailure(RuntimeError):
    """
    Raised (and logged) when the error middleware itself fails while handling an error.
    The original failure is chained as __cause__.
    """

    PREFIX = "Uncaught error in error middleware"

    def __init__(self, failure: BaseException):
        super().__init__(f"{self.PREFIX}: {failure}")
        self.failure = failure
        self.__cause__ = failure


# canonical HTTP-mapped exception

class HttpError(Exception):
    """
    An error you can raise anywhere in a request flow that carries an HTTP status,
    optionally overriding the JSON body and headers when caught by the error middleware.

    - status: HTTP status code (int, required)
    - message: human-friendly message (safe to show to clients)
    - headers: response headers to set (e.g. {"WWW-Authenticate": "Bearer"})
    - body: JSON body sent to the client; gets an "error" key set to `message` if missing
    - custom: optional structured metadata sent to the error tracker only (never to clients)

    The mappings passed in are copied, so callers holding on to them never see them change.
    """

    def __init__(
        self,
        status: int,
        message: str,
        headers: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
        custom: Mapping[str, Any] | None = None,
    ):
        super().__init__(message)
        problem = (
            check_status(status)
            or check_headers({} if headers is None else headers)
            or check_mapping("body", {} if body is None else body)
            or check_mapping("custom", custom, optional=True)
        )
        if problem:
            raise InvalidHttpErrorArgument(problem)

        self.name = f"[{status}]"
        self.status = int(status)
        self.message = message
        self.headers: dict[str, str] = dict(headers or {})
        self.body: dict[str, Any] = dict(body or {})
        self.custom: dict[str, Any] | None = dict(custom) if custom is not None else None

        if "error" not in self.body:
            self.body["error"] = message

    def __str__(self) -> str:
        # the status tag shows up in tracebacks and console reports
        return f"{self.name} {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status!r}, message={self.message!r})"

    # ------------------------
    # Builder-style mutators
    # ------------------------
    def with_body(self, obj: Mapping[str, Any]) -> "HttpError":
        """
        Merge `obj` into the response body (last write wins) and return self, so it
        chains at the raise site:

            raise HttpError.bad_request("Invalid email").with_body({"field": "email"})
        """
        self.body.update(obj)
        return self

    def with_custom(self, obj: Mapping[str, Any]) -> "HttpError":
        """
        Merge `obj` into the custom metadata sent to the error tracker and return self.
        """
        if self.custom is None:
            self.custom = {}
        self.custom.update(obj)
        return self

    # ------------------------
    # Named constructors
    # ------------------------
    @classmethod
    def bad_request(cls, message: str) -> "HttpError":
        return cls(400, message)

    @classmethod
    def unauthorized(cls, message: str, authenticate_header: str = "Bearer") -> "HttpError":
        # RFC 9110: a 401 response must carry a WWW-Authenticate challenge
        return cls(401, message, headers={"WWW-Authenticate": authenticate_header})

    @classmethod
    def forbidden(cls, message: str) -> "HttpError":
        return cls(403, message)

    @classmethod
    def not_found(cls, message: str) -> "HttpError":
        return cls(404, message)


__all__ = [
    "HttpError",
    "InvalidHttpErrorArgument",
    "ErrorMiddlewareFailure",
]


r"""
# =================================================================================================================
# Planned vs unplanned errors
# =================================================================================================================

🧱 1. Planned errors: HttpError
```
    raise HttpError.not_found("Conversation not found")
    raise HttpError(409, "Already exists", body={"code": "duplicate"})
```
You raise these on purpose. The middleware reports them at INFO (they are part of normal
operation) and answers with their status, headers and body.

🔥 2. Unplanned errors: everything else
```
    KeyError, ZeroDivisionError, a bug in a dependency, ...
```
The middleware reports them at ERROR and answers 500 with {"error": "<message>"}.

| Raised                        | Reported at | Status         | Body                        |
| ----------------------------- | ----------- | -------------- | --------------------------- |
| `HttpError(404, "Not Found")` | info        | 404            | `{"error": "Not Found"}`    |
| `HttpError(...).with_body()`  | info        | `status`       | merged `body`               |
| `ValueError("boom")`          | error       | 500            | `{"error": "boom"}`         |
"""
