# src/error_reporting/reporting/
# ├─ __init__.py     # public API: Reporter, report, SentryBackend
# ├─ reporter.py     # Reporter facade + process-wide `report` instance
# ├─ backends.py     # ReportingBackend protocol, SentryBackend
# ├─ pretty.py       # rich-based traceback formatter for the console fallback
# └─ snapshot.py     # RequestSnapshot (request data attached to reports)

from .reporter import Reporter, report
from .backends import ReportingBackend, SentryBackend
from .pretty import PrettyTracebackFormatter
from .snapshot import RequestSnapshot

__all__ = ["Reporter", "report", "ReportingBackend", "SentryBackend", "PrettyTracebackFormatter", "RequestSnapshot"]
