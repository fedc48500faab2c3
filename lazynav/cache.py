"""Bounded LRU cache of directory listings keyed by canonical path.

Recency is the order of access in an ``OrderedDict``: every hit or put moves
the key to the end, and overflow drops the first key. Entries touched in the
same instant therefore still evict in insertion order.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable
from pathlib import Path

from .errors import ConfigurationError
from .file_tree_model import Listing, read_listing

DEFAULT_CACHE_CAPACITY = 500

logger = logging.getLogger(__name__)


class ContentCache:
    """LRU mapping ``canonical directory path -> Listing``.

    ``loader`` reads a directory on cache miss; it must raise
    ``NavigatorIOError`` for unreadable or vanished paths.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CACHE_CAPACITY,
        loader: Callable[[Path], Listing] = read_listing,
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ConfigurationError(f"cache capacity must be a positive integer, got {capacity!r}")
        self.capacity = capacity
        self._loader = loader
        self._entries: OrderedDict[Path, Listing] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def paths(self) -> list[Path]:
        """Cached paths, least recently used first."""
        return list(self._entries)

    def peek(self, path: Path) -> Listing | None:
        """Lookup without touching recency."""
        return self._entries.get(path)

    def get(self, path: Path) -> Listing | None:
        listing = self._entries.get(path)
        if listing is not None:
            self._entries.move_to_end(path)
        return listing

    def get_or_load(self, path: Path) -> Listing:
        listing = self.get(path)
        if listing is not None:
            logger.debug("listing cache hit: %s", path)
            return listing
        logger.debug("listing cache miss: %s", path)
        listing = self._loader(path)
        self.put(path, listing)
        return listing

    def put(self, path: Path, listing: Listing) -> None:
        self._entries[path] = listing
        self._entries.move_to_end(path)
        while len(self._entries) > self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("listing cache evicted: %s", evicted)

    def pop(self, path: Path) -> Listing | None:
        """Explicitly evict ``path``; returns the dropped listing, if any."""
        return self._entries.pop(path, None)

    def pop_tree(self, root: Path) -> list[Path]:
        """Evict ``root`` and every cached path beneath it."""
        dropped: list[Path] = []
        for path in list(self._entries):
            if path == root or root in path.parents:
                del self._entries[path]
                dropped.append(path)
        return dropped

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["DEFAULT_CACHE_CAPACITY", "ContentCache"]
