"""Persistent JSON config helpers.

Stores cache capacity, expansion fan-out tuning, and hidden-file preference.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..cache import DEFAULT_CACHE_CAPACITY
from .expansion import DEFAULT_FANOUT_THRESHOLD, DEFAULT_MAX_WORKERS

APP_NAME = "lazynav"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


@dataclass(frozen=True)
class NavigatorConfig:
    """Tuning knobs for one navigator session."""

    cache_capacity: int = DEFAULT_CACHE_CAPACITY
    expand_fanout_threshold: int = DEFAULT_FANOUT_THRESHOLD
    expand_max_workers: int = DEFAULT_MAX_WORKERS
    show_hidden: bool = True


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        pass


def _positive_int(value: object, default: int) -> int:
    """Accept strictly positive integers; booleans and other types fall back."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def load_navigator_config() -> NavigatorConfig:
    """Build a ``NavigatorConfig`` from persisted values, key by key."""
    data = load_config()
    show_hidden = data.get("show_hidden")
    return NavigatorConfig(
        cache_capacity=_positive_int(data.get("cache_capacity"), DEFAULT_CACHE_CAPACITY),
        expand_fanout_threshold=_positive_int(data.get("expand_fanout_threshold"), DEFAULT_FANOUT_THRESHOLD),
        expand_max_workers=_positive_int(data.get("expand_max_workers"), DEFAULT_MAX_WORKERS),
        show_hidden=show_hidden if isinstance(show_hidden, bool) else True,
    )


def save_navigator_config(config: NavigatorConfig) -> None:
    """Merge ``config`` into the persisted JSON object, keeping unrelated keys."""
    data = load_config()
    data.update(asdict(config))
    save_config(data)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "NavigatorConfig",
    "load_config",
    "save_config",
    "load_navigator_config",
    "save_navigator_config",
]
