"""Filesystem primitives consumed by the navigator.

Directory reads, canonicalization, metadata queries, and recursive removal.
All OS failures are converted to the typed errors in ``lazynav.errors``.
"""

from __future__ import annotations

import os
import shutil
import time
from pathlib import Path

from ..errors import NavigatorIOError, NotADirectoryPathError, PathNotFoundError
from .types import PARENT_ENTRY_NAME, DirectoryEntry, EntryMetadata, Listing, dedupe_entries


def canonicalize(path: Path) -> Path:
    """Return the absolute, symlink-resolved form of ``path``.

    Raises ``PathNotFoundError`` when the path (or a link target) is missing.
    """
    try:
        return Path(path).expanduser().resolve(strict=True)
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise PathNotFoundError(f"Path not found: {path}", path=Path(path)) from exc
    except (RuntimeError, OSError) as exc:
        raise PathNotFoundError(f"Unable to canonicalize {path}: {exc}", path=Path(path)) from exc


def canonicalize_lenient(path: Path) -> Path:
    """Best-effort canonical form that never fails for missing paths."""
    try:
        return Path(path).expanduser().resolve()
    except (RuntimeError, OSError):
        return Path(os.path.abspath(path))


def is_within(path: Path, root: Path) -> bool:
    """Return whether ``path`` is ``root`` or lies under it."""
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False


def require_directory(path: Path) -> Path:
    """Canonicalize ``path`` and require it to be a directory."""
    canonical = canonicalize(path)
    if not canonical.is_dir():
        raise NotADirectoryPathError(f"Not a directory: {canonical}", path=canonical)
    return canonical


def read_listing(directory: Path, show_hidden: bool = True, include_parent: bool = True) -> Listing:
    """Read one directory level into a sorted ``Listing``.

    Children are ordered by case-folded name, then raw name. When
    ``include_parent`` is set and ``directory`` is not the filesystem root, a
    synthetic ``..`` entry pointing at the parent is placed first.
    Raises ``NavigatorIOError`` when the directory cannot be scanned.
    """
    directory = Path(directory)
    children: list[DirectoryEntry] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                children.append(
                    DirectoryEntry(
                        path=canonicalize_lenient(Path(child.path)),
                        display_name=name,
                        is_dir=is_dir,
                    )
                )
    except OSError as exc:
        raise NavigatorIOError(f"Unable to read directory {directory}: {exc}", path=directory) from exc

    children.sort(key=lambda item: (item.display_name.casefold(), item.display_name))
    rows: list[DirectoryEntry] = []
    parent = directory.parent
    if include_parent and parent != directory:
        rows.append(DirectoryEntry(path=parent, display_name=PARENT_ENTRY_NAME, is_dir=True))
    rows.extend(children)
    return Listing(directory=directory, entries=dedupe_entries(rows), loaded_at=time.time())


def entry_metadata(path: Path) -> EntryMetadata:
    """Stat ``path`` (following links) and return size/kind/mtime."""
    try:
        stat = Path(path).stat()
    except FileNotFoundError as exc:
        raise PathNotFoundError(f"Path not found: {path}", path=Path(path)) from exc
    except OSError as exc:
        raise NavigatorIOError(f"Unable to stat {path}: {exc}", path=Path(path)) from exc
    is_dir = Path(path).is_dir()
    return EntryMetadata(
        path=Path(path),
        is_dir=is_dir,
        size=None if is_dir else int(stat.st_size),
        mtime_ns=int(stat.st_mtime_ns),
    )


def remove_path(path: Path) -> None:
    """Remove a file, symlink, or directory tree at ``path``.

    Symlinks are unlinked without touching their target.
    """
    path = Path(path)
    try:
        if path.is_symlink() or not path.is_dir():
            path.unlink()
        else:
            shutil.rmtree(path)
    except FileNotFoundError as exc:
        raise NavigatorIOError(f"Path vanished before removal: {path}", path=path) from exc
    except OSError as exc:
        raise NavigatorIOError(f"Unable to remove {path}: {exc}", path=path) from exc


__all__ = [
    "canonicalize",
    "canonicalize_lenient",
    "is_within",
    "require_directory",
    "read_listing",
    "entry_metadata",
    "remove_path",
]
