"""Typed failures raised by the navigator core.

Every error derives from ``NavigatorError`` and also from the closest builtin
so callers can catch either. Expected conditions (missing paths, permission
denied, empty directories) always surface as one of these, never as a crash.
"""

from __future__ import annotations

from pathlib import Path


class NavigatorError(Exception):
    """Base class for all navigator failures."""


class NavigatorIOError(NavigatorError, OSError):
    """Filesystem read/write/permission failure."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class NavigatorPathError(NavigatorError, ValueError):
    """Path cannot be used: outside the root, missing, or wrong kind."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class PathOutsideRootError(NavigatorPathError):
    """Canonical path is not the session root or one of its descendants."""


class PathNotFoundError(NavigatorPathError):
    """Path cannot be canonicalized because it does not exist."""


class NotADirectoryPathError(NavigatorPathError):
    """Path exists but is not a directory."""


class CacheInvariantError(NavigatorError, RuntimeError):
    """Cache lacks an entry it must hold; an internal consistency violation."""


class NavigatorStateError(NavigatorError, RuntimeError):
    """Operation is not valid for the current navigator state."""


class ConfigurationError(NavigatorError, ValueError):
    """Invalid construction parameter (capacity, worker count, threshold)."""


__all__ = [
    "NavigatorError",
    "NavigatorIOError",
    "NavigatorPathError",
    "PathOutsideRootError",
    "PathNotFoundError",
    "NotADirectoryPathError",
    "CacheInvariantError",
    "NavigatorStateError",
    "ConfigurationError",
]
