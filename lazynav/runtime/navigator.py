"""Directory navigator: current directory, expansion depth, filter, selection.

The navigator owns one ``NavigatorState`` per session and mutates it only
from the calling thread. Every operation builds its result first and commits
it last, so a failure leaves the previous state intact.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, replace
from functools import partial
from pathlib import Path

from ..cache import ContentCache
from ..errors import NavigatorIOError, NavigatorPathError, NavigatorStateError, PathOutsideRootError
from ..file_tree_model import (
    DirectoryEntry,
    EntryMetadata,
    Listing,
    canonicalize,
    canonicalize_lenient,
    dedupe_entries,
    entry_metadata,
    is_within,
    read_listing,
    remove_path,
    require_directory,
)
from ..search import filter_entries, filter_labels
from .config import NavigatorConfig
from .expansion import ExpansionEngine
from .history import HistoryTracker

logger = logging.getLogger(__name__)


@dataclass
class NavigatorState:
    """Mutable per-session navigator state."""

    root: Path
    current_directory: Path
    current_listing: Listing
    search_input: str = ""
    expand_level: int = 0
    selected_index: int = 0


def wrap_index(index: int, count: int) -> int:
    """Map any integer onto ``[0, count)`` modularly; ``count`` must be positive."""
    return ((index % count) + count) % count


class Navigator:
    """Interactive directory navigator confined to one session root."""

    def __init__(
        self,
        root: Path,
        config: NavigatorConfig | None = None,
        *,
        cache: ContentCache | None = None,
        history: HistoryTracker | None = None,
        engine: ExpansionEngine | None = None,
    ) -> None:
        config = config if config is not None else NavigatorConfig()
        reader = partial(read_listing, show_hidden=config.show_hidden)
        self.config = config
        self.cache = cache if cache is not None else ContentCache(config.cache_capacity, loader=reader)
        self.history = history if history is not None else HistoryTracker()
        self.engine = (
            engine
            if engine is not None
            else ExpansionEngine(config.expand_fanout_threshold, config.expand_max_workers, reader=reader)
        )

        canonical_root = require_directory(Path(root))
        listing = self.cache.get_or_load(canonical_root)
        self._state = NavigatorState(
            root=canonical_root,
            current_directory=canonical_root,
            current_listing=listing,
        )

    @property
    def state(self) -> NavigatorState:
        return self._state

    @property
    def root(self) -> Path:
        return self._state.root

    @property
    def current_directory(self) -> Path:
        return self._state.current_directory

    @property
    def listing(self) -> Listing:
        return self._state.current_listing

    @property
    def search_input(self) -> str:
        return self._state.search_input

    @property
    def expand_level(self) -> int:
        return self._state.expand_level

    @property
    def selected_index(self) -> int:
        return self._state.selected_index

    @property
    def loaded_at(self) -> float:
        return self._state.current_listing.loaded_at

    # -- directory changes -------------------------------------------------

    def enter(self, path: Path) -> Path:
        """Switch to ``path`` (relative paths resolve against the current directory).

        Returns the canonical directory entered.
        """
        state = self._state
        path = Path(path)
        if not path.is_absolute():
            path = state.current_directory / path
        canonical = canonicalize(path)
        if not is_within(canonical, state.root):
            raise PathOutsideRootError(f"{canonical} is outside of {state.root}", path=canonical)
        canonical = require_directory(canonical)

        listing = self.cache.get_or_load(canonical)

        previous = state.current_directory
        if previous != canonical and previous.is_dir():
            self.history.push(previous)
        state.current_directory = canonical
        state.current_listing = listing
        state.expand_level = 0
        state.search_input = ""
        state.selected_index = 0
        logger.info("entered %s", canonical)
        return canonical

    def refresh(self) -> None:
        """Re-read the current directory and restore the previous expansion depth."""
        state = self._state
        self.cache.pop(state.current_directory)
        listing = self.cache.get_or_load(state.current_directory)

        fresh: list[tuple[Path, Listing]] = []
        for _ in range(state.expand_level):
            listing, loaded = self._expand_listing(listing)
            fresh.extend(loaded)
        if state.expand_level:
            self._revalidate_current()

        for path, child_listing in fresh:
            self.cache.put(path, child_listing)
        state.current_listing = listing
        logger.debug("refreshed %s at level %d", state.current_directory, state.expand_level)

    # -- expansion ---------------------------------------------------------

    def _expand_listing(self, listing: Listing) -> tuple[Listing, list[tuple[Path, Listing]]]:
        """Replace each directory row with its children, one level deeper.

        Directories that read as empty stay in place. Directories that fail to
        read are omitted. Returns the merged listing and the child listings
        that were read successfully.
        """
        targets = [entry for entry in listing.children if entry.is_dir]
        results = iter(self.engine.read_many([entry.path for entry in targets]))

        merged: list[DirectoryEntry] = []
        if listing.parent_entry is not None:
            merged.append(listing.parent_entry)
        fresh: list[tuple[Path, Listing]] = []
        for entry in listing.children:
            if not entry.is_dir:
                merged.append(entry)
                continue
            child_listing = next(results)
            if child_listing is None:
                continue
            fresh.append((entry.path, child_listing))
            children = child_listing.children
            if not children:
                merged.append(entry)
                continue
            merged.extend(
                replace(child, display_name=f"{entry.display_name}/{child.display_name}")
                for child in children
            )

        expanded = Listing(
            directory=listing.directory,
            entries=dedupe_entries(merged),
            loaded_at=listing.loaded_at,
        )
        return expanded, fresh

    def _revalidate_current(self) -> None:
        try:
            require_directory(self._state.current_directory)
        except NavigatorPathError as exc:
            raise NavigatorIOError(
                f"Current directory is no longer readable: {self._state.current_directory}",
                path=self._state.current_directory,
            ) from exc

    def expand(self) -> None:
        """Expand every directory row one level and bump ``expand_level``."""
        state = self._state
        listing, fresh = self._expand_listing(state.current_listing)
        self._revalidate_current()

        for path, child_listing in fresh:
            self.cache.put(path, child_listing)
        state.current_listing = listing
        state.expand_level += 1
        logger.debug("expanded %s to level %d", state.current_directory, state.expand_level)

    def _ancestor_entry(self, parts: tuple[str, ...]) -> DirectoryEntry:
        """Directory row for the display-name prefix ``parts``."""
        return DirectoryEntry(
            path=canonicalize_lenient(self._state.current_directory.joinpath(*parts)),
            display_name="/".join(parts),
            is_dir=True,
        )

    def collapse(self) -> None:
        """Undo one ``expand()`` step; no-op at level 0."""
        state = self._state
        if state.expand_level == 0:
            return
        target_depth = state.expand_level - 1

        listing = state.current_listing
        merged: list[DirectoryEntry] = []
        if listing.parent_entry is not None:
            merged.append(listing.parent_entry)
        ancestors: dict[tuple[str, ...], DirectoryEntry] = {}
        for entry in listing.children:
            if entry.depth <= target_depth:
                merged.append(entry)
                continue
            parts = entry.name_parts[: target_depth + 1]
            ancestor = ancestors.get(parts)
            if ancestor is None:
                ancestor = self._ancestor_entry(parts)
                ancestors[parts] = ancestor
            merged.append(ancestor)

        state.current_listing = Listing(
            directory=listing.directory,
            entries=dedupe_entries(merged),
            loaded_at=listing.loaded_at,
        )
        state.expand_level = target_depth
        logger.debug("collapsed %s to level %d", state.current_directory, state.expand_level)

    # -- filtering and selection --------------------------------------------

    def set_search(self, text: str) -> None:
        self._state.search_input = text
        self._state.selected_index = 0

    def visible_entries(self) -> Iterator[DirectoryEntry]:
        """Lazily yield listing rows whose display name matches the search input."""
        return filter_entries(self._state.current_listing.entries, self._state.search_input)

    def _select_entry(self, index: int) -> DirectoryEntry:
        entries = list(self.visible_entries())
        if not entries:
            raise NavigatorStateError("No visible entries to select")
        effective = wrap_index(index, len(entries))
        self._state.selected_index = effective
        return entries[effective]

    def select(self, index: int) -> Path:
        """Return the canonical path at ``index`` among visible entries, wrapping around."""
        return self._select_entry(index).path

    def selected_entry(self) -> DirectoryEntry:
        return self._select_entry(self._state.selected_index)

    def move_selection(self, delta: int) -> DirectoryEntry:
        return self._select_entry(self._state.selected_index + delta)

    def activate(self, index: int) -> Path:
        """Enter the selected directory, or return the selected file's path."""
        entry = self._select_entry(index)
        if entry.is_dir:
            return self.enter(entry.path)
        return entry.path

    def entry_metadata(self, index: int) -> EntryMetadata:
        return entry_metadata(self._select_entry(index).path)

    # -- mutation ----------------------------------------------------------

    def _listing_without(self, listing: Listing, removed: DirectoryEntry) -> Listing:
        """Drop ``removed``; an emptied expanded directory falls back to its own row."""
        parent_parts = removed.name_parts[:-1]
        if not parent_parts:
            return listing.without(removed.path)

        prefix = "/".join(parent_parts) + "/"
        entries: list[DirectoryEntry] = []
        for entry in listing.entries:
            if entry.path == removed.path:
                has_sibling = any(
                    other.path != removed.path and other.display_name.startswith(prefix)
                    for other in listing.entries
                )
                if not has_sibling:
                    entries.append(self._ancestor_entry(parent_parts))
                continue
            entries.append(entry)
        return Listing(directory=listing.directory, entries=dedupe_entries(entries), loaded_at=listing.loaded_at)

    def delete(self, index: int) -> Path:
        """Remove the selected filesystem object and forget it everywhere.

        Filesystem failures raise ``NavigatorIOError`` before any in-memory
        change.
        """
        state = self._state
        entry = self._select_entry(index)
        if entry.is_parent:
            raise NavigatorStateError("Refusing to delete the parent directory entry")

        location = state.current_directory.joinpath(*entry.name_parts)
        remove_path(location)

        state.current_listing = self._listing_without(state.current_listing, entry)
        self.cache.pop_tree(entry.path)
        parent_directory = canonicalize_lenient(location.parent)
        cached_parent = self.cache.peek(parent_directory)
        if cached_parent is not None:
            self.cache.put(parent_directory, cached_parent.without(entry.path))
        for path in self.history.paths():
            if is_within(path, entry.path):
                self.history.remove(path)
        logger.info("deleted %s", location)
        return entry.path

    # -- history view ------------------------------------------------------

    def history_entries(self) -> list[tuple[Path, bool]]:
        """History paths paired with a fresh existence check."""
        return self.history.probe()

    def visible_history(self) -> list[Path]:
        paths = self.history.paths()
        matches = filter_labels([str(path) for path in paths], self._state.search_input)
        return [paths[idx] for idx, _label in matches]

    def _history_target(self, index: int) -> Path:
        paths = self.visible_history()
        if not paths:
            raise NavigatorStateError("History is empty")
        return paths[wrap_index(index, len(paths))]

    def enter_history(self, index: int) -> Path:
        return self.enter(self._history_target(index))

    def drop_history_entry(self, index: int) -> Path:
        """Remove one history entry from both history and cache."""
        target = self._history_target(index)
        self.history.drop_invalid(target, self.cache)
        logger.info("dropped history entry %s", target)
        return target


__all__ = ["Navigator", "NavigatorState", "wrap_index"]
