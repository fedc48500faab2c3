"""Search package exports.

Subsequence matching used to filter visible listing rows and history paths.
"""

from __future__ import annotations

from .fuzzy import filter_entries, filter_labels, should_select

__all__ = [
    "filter_entries",
    "filter_labels",
    "should_select",
]
