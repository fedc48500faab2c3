"""Navigator runtime: state machine, expansion policy, history, config.

``Navigator`` is the composition root; the other modules are its
collaborators and can be constructed and injected independently in tests.
"""

from __future__ import annotations

from .config import NavigatorConfig, load_navigator_config, save_navigator_config
from .expansion import ExpansionEngine
from .history import HistoryTracker
from .navigator import Navigator, NavigatorState, wrap_index

__all__ = [
    "ExpansionEngine",
    "HistoryTracker",
    "Navigator",
    "NavigatorConfig",
    "NavigatorState",
    "load_navigator_config",
    "save_navigator_config",
    "wrap_index",
]
