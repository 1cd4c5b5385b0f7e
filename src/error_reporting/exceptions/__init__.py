# error_reporting/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   └── base.py        # HttpError (planned errors) + middleware/validation failures
# └── validators/
#     └── exception_validators.py   # argument checks used by HttpError

from .base import HttpError, InvalidHttpErrorArgument, ErrorMiddlewareFailure

__all__ = ["HttpError", "InvalidHttpErrorArgument", "ErrorMiddlewareFailure"]
