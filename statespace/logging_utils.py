"""statespace.logging_utils
=========================

Simple logging utilities: tagged console messages for the search loop, and a
JSON-lines record of puzzles that turned out to have no solution so they can
be inspected later.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .constants import FAIL_LOG


def warn(message: str, verbose: bool = True) -> None:
    """Print ``message`` with a ``[WARN]`` tag when ``verbose`` is set."""

    if verbose:
        print(f"[WARN] {message}")


def note(message: str, verbose: bool = True) -> None:
    if verbose:
        print(f"[SEARCH] {message}")


def log_unsolved(puzzle_id: str, description: Dict[str, Any], path: str | None = None) -> None:
    """Append a JSON line describing an unsolved puzzle to :data:`FAIL_LOG`."""

    entry = {"puzzle_id": puzzle_id}
    entry.update(description)
    with Path(path or FAIL_LOG).open("a") as handle:
        handle.write(json.dumps(entry, default=str) + "\n")


__all__ = ["warn", "note", "log_unsolved"]
