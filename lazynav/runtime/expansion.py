"""Fan-out policy for multi-directory reads during ``expand()``.

Small batches run inline on the caller's thread. Larger batches go to a
bounded thread pool; every job carries its input index so the merged result
keeps input order no matter which read finishes first.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from ..errors import ConfigurationError
from ..file_tree_model import Listing, read_listing

DEFAULT_FANOUT_THRESHOLD = 6
DEFAULT_MAX_WORKERS = 4

logger = logging.getLogger(__name__)


def _require_positive(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    return value


class ExpansionEngine:
    """Reads many directories, sequentially or on a bounded worker pool.

    ``reader`` must be side-effect free: workers only return owned
    ``Listing`` values and never touch navigator state.
    """

    def __init__(
        self,
        fanout_threshold: int = DEFAULT_FANOUT_THRESHOLD,
        max_workers: int = DEFAULT_MAX_WORKERS,
        reader: Callable[[Path], Listing] = read_listing,
    ) -> None:
        self.fanout_threshold = _require_positive("fanout_threshold", fanout_threshold)
        self.max_workers = _require_positive("max_workers", max_workers)
        self._reader = reader

    def _read_one(self, target: Path) -> Listing | None:
        try:
            return self._reader(target)
        except Exception as exc:
            logger.warning("skipping unreadable directory %s: %s", target, exc)
            return None

    def read_many(self, targets: Sequence[Path]) -> list[Listing | None]:
        """Read every target; failed targets come back as ``None`` (omitted)."""
        if not targets:
            return []

        if len(targets) < self.fanout_threshold:
            logger.debug("expanding %d directories sequentially", len(targets))
            return [self._read_one(target) for target in targets]

        workers = min(self.max_workers, len(targets))
        logger.debug("expanding %d directories on %d workers", len(targets), workers)
        results: list[Listing | None] = [None] * len(targets)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lazynav-expand") as executor:
            futures = {executor.submit(self._read_one, target): position for position, target in enumerate(targets)}
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        return results


__all__ = [
    "DEFAULT_FANOUT_THRESHOLD",
    "DEFAULT_MAX_WORKERS",
    "ExpansionEngine",
]
