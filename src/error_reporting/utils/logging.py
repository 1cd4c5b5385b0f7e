from pathlib import Path
from importlib import metadata as importlib_metadata
from typing import Any

DISTRIBUTION_NAME = "error-reporting"


# --------------------
# Find pyproject.toml
# --------------------


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    p = start
    for _ in range(max_up):
        candidate = p / "pyproject.toml"
        if candidate.exists():
            return candidate
        if p.parent == p:
            break
        p = p.parent
    return None


def get_pyproject_value(key: str, start: Path | None = None, max_up: int = 5, default: Any = None) -> Any:
    """
    Return the value for the dot-separated `key` (e.g. "project.version") from the
    nearest pyproject.toml above `start` (defaults to this module's folder).
    Returns `default` if the file is missing, unreadable, or lacks the key.
    """
    # tomllib is stdlib from Python 3.11; tomli is the same parser for older Pythons.
    try:
        import tomllib as _toml_loader
    except ImportError:
        import tomli as _toml_loader

    pyproject = find_pyproject(start or Path(__file__).resolve().parent, max_up=max_up)
    if not pyproject:
        return default

    try:
        with pyproject.open("rb") as f:
            cur = _toml_loader.load(f)
    except (OSError, _toml_loader.TOMLDecodeError):
        return default

    for part in key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def get_project_name(default: str = DISTRIBUTION_NAME) -> str:
    """
    Service name used in structured logs: project.name from a source checkout,
    else the distribution name.
    """
    return get_pyproject_value("project.name", default=default)


def get_project_version(default: str = "unknown") -> str:
    """
    Installed distribution version first (containers ship without pyproject.toml),
    then project.version from pyproject.toml, then `default`.
    """
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        pass
    val = get_pyproject_value("project.version")
    return val if val is not None else default


__all__ = [
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
