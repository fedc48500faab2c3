"""Domain model for directory listings plus filesystem primitives.

This package contains non-UI listing primitives:
- entry/listing datatypes with derived expansion depth
- directory reads, canonicalization, metadata, and recursive removal
"""

from __future__ import annotations

from .types import PARENT_ENTRY_NAME, DirectoryEntry, EntryMetadata, Listing, dedupe_entries
from .fs import (
    canonicalize,
    canonicalize_lenient,
    entry_metadata,
    is_within,
    read_listing,
    remove_path,
    require_directory,
)

__all__ = [
    "PARENT_ENTRY_NAME",
    "DirectoryEntry",
    "EntryMetadata",
    "Listing",
    "dedupe_entries",
    "canonicalize",
    "canonicalize_lenient",
    "entry_metadata",
    "is_within",
    "read_listing",
    "remove_path",
    "require_directory",
]
