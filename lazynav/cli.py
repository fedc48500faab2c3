"""Command-line front door for lazynav.

Parses CLI options, builds a navigator on the target directory, and prints
the visible listing. Interactive front ends drive ``lazynav.runtime``
directly.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .errors import NavigatorError
from .runtime import Navigator, load_navigator_config


def _nonnegative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def render_listing(navigator: Navigator) -> str:
    """Render visible entries one per line, directories with a trailing ``/``."""
    lines = []
    for entry in navigator.visible_entries():
        suffix = "/" if entry.is_dir and not entry.is_parent else ""
        lines.append(f"{entry.display_name}{suffix}\n")
    return "".join(lines)


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and print the listing for a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    parser = argparse.ArgumentParser(description="List a directory the way the lazynav navigator sees it.")
    parser.add_argument("path", nargs="?", default=None, help="Directory to list. Defaults to current directory.")
    parser.add_argument("--search", default="", help="Subsequence filter applied to entry names.")
    parser.add_argument(
        "--expand",
        type=_nonnegative_int,
        default=0,
        metavar="N",
        help="Expand nested directories N levels deep.",
    )
    parser.add_argument("--no-hidden", action="store_true", help="Skip dot-files.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log cache and expansion activity to stderr.")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)

    config = load_navigator_config()
    if args.no_hidden:
        config = dataclasses.replace(config, show_hidden=False)

    try:
        navigator = Navigator(path, config)
        for _ in range(args.expand):
            navigator.expand()
    except NavigatorError as exc:
        raise SystemExit(str(exc)) from exc

    navigator.set_search(args.search)
    sys.stdout.write(render_listing(navigator))


if __name__ == "__main__":
    main()
