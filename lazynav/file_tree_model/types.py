"""Domain datatypes for directory listings held by the navigator."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

PARENT_ENTRY_NAME = ".."


@dataclass(frozen=True)
class DirectoryEntry:
    """One listing row.

    ``path`` is canonical. ``display_name`` is the entry's location relative to
    the directory whose listing holds it (``"sub/c.rs"`` after one expansion).
    """

    path: Path
    display_name: str
    is_dir: bool

    @property
    def is_parent(self) -> bool:
        return self.display_name == PARENT_ENTRY_NAME

    @property
    def name_parts(self) -> tuple[str, ...]:
        return PurePosixPath(self.display_name).parts

    @property
    def depth(self) -> int:
        """Expansion depth derived from display-name components (0 = direct child)."""
        if self.is_parent:
            return 0
        return max(0, len(self.name_parts) - 1)


@dataclass(frozen=True)
class EntryMetadata:
    """Size/kind/mtime observed for one filesystem object."""

    path: Path
    is_dir: bool
    size: int | None
    mtime_ns: int | None


@dataclass(frozen=True)
class Listing:
    """Ordered entries for one directory; entry 0 is ``..`` unless at filesystem root."""

    directory: Path
    entries: tuple[DirectoryEntry, ...] = ()
    loaded_at: float = field(default=0.0, compare=False)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[DirectoryEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> DirectoryEntry:
        return self.entries[index]

    @property
    def parent_entry(self) -> DirectoryEntry | None:
        if self.entries and self.entries[0].is_parent:
            return self.entries[0]
        return None

    @property
    def children(self) -> tuple[DirectoryEntry, ...]:
        """Entries without the synthetic parent row."""
        if self.parent_entry is not None:
            return self.entries[1:]
        return self.entries

    def paths(self) -> list[Path]:
        return [entry.path for entry in self.entries]

    def without(self, path: Path) -> Listing:
        """Return a copy with every entry whose canonical path is ``path`` removed."""
        return Listing(
            directory=self.directory,
            entries=tuple(entry for entry in self.entries if entry.path != path),
            loaded_at=self.loaded_at,
        )


def dedupe_entries(entries: list[DirectoryEntry]) -> tuple[DirectoryEntry, ...]:
    """Merge entries by canonical path, keeping the first occurrence's position."""
    seen: set[Path] = set()
    merged: list[DirectoryEntry] = []
    for entry in entries:
        if entry.path in seen:
            continue
        seen.add(entry.path)
        merged.append(entry)
    return tuple(merged)


__all__ = [
    "PARENT_ENTRY_NAME",
    "DirectoryEntry",
    "EntryMetadata",
    "Listing",
    "dedupe_entries",
]
