from collections.abc import Mapping
from numbers import Integral
from typing import Any


def _type_name(value: Any) -> str:
    return "None" if value is None else type(value).__name__


def check_status(status: Any) -> str | None:
    """
    Return a problem description when `status` cannot be used as an HTTP status,
    or None when it is fine.

    - bool is rejected even though it subclasses int (True is not a status code).
    - floats are rejected: HTTP status codes are integers.
    """
    if isinstance(status, bool) or not isinstance(status, Integral):
        return f"Expected HttpError status to be a number, got {_type_name(status)}"
    return None


def check_mapping(field: str, value: Any, *, optional: bool = False) -> str | None:
    """
    Return a problem description when `value` is not a mapping, or None when it is fine.
    - field: argument name used in the message (e.g. "body", "custom")
    - optional: when True, None is accepted
    """
    if value is None and optional:
        return None
    if not isinstance(value, Mapping):
        return f"Expected {field} to be a mapping, got {_type_name(value)}"
    return None


def check_headers(headers: Any) -> str | None:
    """
    Return a problem description when `headers` is not a mapping of str to str.
    Starlette only accepts string header names and values.
    """
    problem = check_mapping("headers", headers)
    if problem:
        return problem
    for key, value in headers.items():
        if not isinstance(key, str):
            return f"Expected header names to be strings, got {_type_name(key)}"
        if not isinstance(value, str):
            return f"Expected header {key!r} to be a string, got {_type_name(value)}"
    return None
