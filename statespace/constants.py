"""statespace.constants
=====================

Global constants used across the package. Keeping them here avoids import
cycles between modules and makes it easier to discover configurable paths.
"""

from __future__ import annotations

FAIL_LOG = "unsolved_puzzles.jsonl"

# Used by the CLI only; the library default is an unbounded search.
DEFAULT_TIME_BUDGET_S = 30.0

EXIT_SOLVED = 0
EXIT_NO_SOLUTION = 1
EXIT_BUDGET_EXHAUSTED = 2

__all__ = [
    "FAIL_LOG",
    "DEFAULT_TIME_BUDGET_S",
    "EXIT_SOLVED",
    "EXIT_NO_SOLUTION",
    "EXIT_BUDGET_EXHAUSTED",
]
