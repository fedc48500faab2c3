"""Directory history: most-recent-first, deduplicated, staleness-aware.

This module intentionally has no UI concerns.
Paths are stored canonicalized so symlinked aliases collapse to one entry.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from ..cache import ContentCache
from ..errors import CacheInvariantError
from ..file_tree_model import canonicalize_lenient


class HistoryTracker:
    """Unbounded stack of visited directories, newest first.

    Re-visiting a directory moves it to the front instead of duplicating it.
    """

    def __init__(self) -> None:
        self._paths: list[Path] = []

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._paths))

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def paths(self) -> list[Path]:
        return list(self._paths)

    def push(self, path: Path) -> Path:
        """Record ``path`` at the front and return its canonical form."""
        canonical = canonicalize_lenient(path)
        self.remove(canonical)
        self._paths.insert(0, canonical)
        return canonical

    def remove(self, path: Path) -> bool:
        try:
            self._paths.remove(path)
        except ValueError:
            return False
        return True

    def probe(self) -> list[tuple[Path, bool]]:
        """Return ``(path, exists)`` for every entry; checked fresh on each call."""
        return [(path, path.is_dir()) for path in self._paths]

    def invalid_paths(self) -> list[Path]:
        return [path for path, exists in self.probe() if not exists]

    def drop_invalid(self, path: Path, cache: ContentCache) -> None:
        """Remove exactly ``path`` from both history and ``cache``.

        The history entry is always removed. A listing missing from the cache
        means the two stores have diverged; that is reported afterwards as
        ``CacheInvariantError``.
        """
        self.remove(path)
        if cache.pop(path) is None:
            raise CacheInvariantError(f"Cache must contain history path {path}")


__all__ = ["HistoryTracker"]
