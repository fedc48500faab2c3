from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..file_tree_model.types import DirectoryEntry


def should_select(name: str, pattern: str) -> bool:
    """Return whether ``pattern`` is an ordered, case-insensitive subsequence of ``name``.

    ``"rs"`` selects ``"result.rs"`` and ``"rts"`` but not ``"sub"``.
    """
    if not pattern:
        return True
    cursor = 0
    remaining = len(pattern)
    for char in name:
        if char == pattern[cursor] or char.casefold() == pattern[cursor].casefold():
            cursor += 1
            if cursor == remaining:
                return True
    return False


def filter_entries(entries: Iterable[DirectoryEntry], pattern: str) -> Iterator[DirectoryEntry]:
    for entry in entries:
        if should_select(entry.display_name, pattern):
            yield entry


def filter_labels(labels: Iterable[str], pattern: str) -> list[tuple[int, str]]:
    return [(idx, label) for idx, label in enumerate(labels) if should_select(label, pattern)]
