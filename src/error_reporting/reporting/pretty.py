# src/error_reporting/reporting/pretty.py
"""
Human-friendly traceback rendering for the console fallback.

When no error tracker is configured, the Reporter prints exceptions to the console.
Raw tracebacks of a Starlette/FastAPI app are mostly framework frames, so the
formatter collapses frames coming from:

  - the Python standard library (asyncio, contextlib, ...)
  - the packages listed in Settings.TRACEBACK_SUPPRESS (default: starlette, fastapi)

Collapsed frames still show their file/line header, only the code excerpt is hidden,
so the call path stays readable.

Any object with a `render(exc) -> str` method can replace PrettyTracebackFormatter
(see TracebackFormatter), e.g. a formatter that emits plain `traceback.format_exception`.
"""

import importlib
import io
import logging
import sysconfig
from types import ModuleType
from typing import Iterable, Protocol

from rich.console import Console
from rich.traceback import Traceback

logger = logging.getLogger(__name__)


class TracebackFormatter(Protocol):
    def render(self, exc: BaseException) -> str: ...


def build_suppress_list(packages: Iterable[str]) -> list[str | ModuleType]:
    """
    Return the rich `suppress` entries for the stdlib plus the importable `packages`.
    Packages that are not installed are skipped.
    """
    suppress: list[str | ModuleType] = [sysconfig.get_paths()["stdlib"]]
    for name in packages:
        try:
            suppress.append(importlib.import_module(name))
        except ImportError:
            logger.debug("Traceback suppression skipped for missing package %s", name)
    return suppress


class PrettyTracebackFormatter:
    """
    Render an exception with rich.traceback into plain text.

    - packages: package names whose frames are collapsed
    - width: console width used for rendering
    - max_frames: cap on rendered frames (rich collapses the middle of long recursions)
    """

    def __init__(self, packages: Iterable[str] = ("starlette", "fastapi"), *, width: int = 100, max_frames: int = 50):
        self.suppress = build_suppress_list(packages)
        self.width = width
        self.max_frames = max_frames

    def render(self, exc: BaseException) -> str:
        traceback = Traceback.from_exception(
            type(exc),
            exc,
            exc.__traceback__,
            width=self.width,
            suppress=self.suppress,
            max_frames=self.max_frames,
        )
        # Render into a buffer: the text goes through logging, not straight to a terminal.
        console = Console(file=io.StringIO(), width=self.width, color_system=None, force_terminal=False)
        console.print(traceback)
        return console.file.getvalue().rstrip()
