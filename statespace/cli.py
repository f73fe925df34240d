"""statespace.cli
===============

Command-line entry point. Two sub-commands drive the bundled puzzle bindings
through the breadth-first engine:

``statespace water --capacity 4 3 --target 2``
``statespace blocks --infile level.json``

A level file is a JSON object with ``terrain`` (rows of 0/1), ``start`` and
``goal`` (``[row, col]``).
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .blocks import BlockPuzzle
from .constants import (
    DEFAULT_TIME_BUDGET_S,
    EXIT_BUDGET_EXHAUSTED,
    EXIT_NO_SOLUTION,
    EXIT_SOLVED,
    FAIL_LOG,
)
from .logging_utils import log_unsolved, warn
from .search import SearchConfig, SearchProblem, SearchStats, solve
from .water import WaterPouring


def _load_level(infile: str) -> BlockPuzzle:
    raw = json.loads(Path(infile).read_text())
    if not isinstance(raw, dict):
        raise ValueError(f"{infile}: level must be a JSON object, got {type(raw).__name__}")
    missing = [key for key in ("terrain", "start", "goal") if key not in raw]
    if missing:
        raise ValueError(f"{infile}: level is missing {missing}")
    return BlockPuzzle(raw["terrain"], _cell(infile, "start", raw["start"]), _cell(infile, "goal", raw["goal"]))


def _cell(infile: str, label: str, value: Any) -> Tuple[int, int]:
    if (
        not isinstance(value, list)
        or len(value) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    ):
        raise ValueError(f"{infile}: {label} must be a [row, col] pair of integers, got {value!r}")
    return value[0], value[1]


def _build(args: argparse.Namespace) -> Tuple[str, SearchProblem, Dict[str, Any]]:
    if args.command == "water":
        puzzle = WaterPouring(args.capacity)
        description = puzzle.describe()
        description["target"] = args.target
        puzzle_id = "water-" + "-".join(str(c) for c in puzzle.capacities) + f"-t{args.target}"
        return puzzle_id, puzzle.problem(args.target), description
    level = _load_level(args.infile)
    return f"blocks-{Path(args.infile).stem}", level.problem(), level.describe()


def _report(puzzle_id: str, moves: List[str] | None, stats: SearchStats) -> Dict[str, Any]:
    return {
        "puzzle_id": puzzle_id,
        "solved": moves is not None,
        "moves": moves or [],
        "length": None if moves is None else len(moves),
        "stats": stats.as_dict(),
    }


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, run the search and return the exit status."""

    parser = argparse.ArgumentParser("statespace")
    parser.add_argument("--max-generations", type=int, default=None, help="Stop after this many generations")
    parser.add_argument(
        "--time-budget",
        type=float,
        default=DEFAULT_TIME_BUDGET_S,
        help="Time budget in seconds (0 or negative disables it)",
    )
    parser.add_argument("--outfile", default=None, help="Write a JSON report here")
    parser.add_argument("--fail-log", default=FAIL_LOG, help="JSONL file collecting unsolved puzzles")
    parser.add_argument("--verbose", action="store_true", help="Print per-generation progress")
    sub = parser.add_subparsers(dest="command", required=True)

    water = sub.add_parser("water", help="Measure an exact amount with a set of glasses")
    water.add_argument("--capacity", type=int, nargs="+", required=True, help="Glass capacities")
    water.add_argument("--target", type=int, required=True, help="Amount to measure")

    blocks = sub.add_parser("blocks", help="Roll a block onto the goal cell")
    blocks.add_argument("--infile", required=True, help="Level JSON file")

    args = parser.parse_args(argv)

    time_budget = args.time_budget if args.time_budget and args.time_budget > 0 else None

    try:
        cfg = SearchConfig(max_generations=args.max_generations, time_budget_s=time_budget, verbose=args.verbose)
        puzzle_id, problem, description = _build(args)
    except (ValueError, KeyError, OSError) as exc:
        parser.error(str(exc))

    if not cfg.bounded:
        warn("running without a generation or time limit; an infinite state space will not terminate")

    path, stats = solve(problem, cfg)
    moves = None if path is None else [str(move) for move in path.moves]

    if path is not None:
        print(f"{puzzle_id}: solved in {len(path)} move(s) | generations={stats.generations} explored={stats.explored_size}")
        print("  " + (" ".join(moves) if moves else "(already solved)"))
        status = EXIT_SOLVED
    elif stats.budget_exhausted:
        print(f"{puzzle_id}: budget exhausted after {stats.generations} generation(s)")
        status = EXIT_BUDGET_EXHAUSTED
    else:
        print(f"{puzzle_id}: no solution ({stats.explored_size} states explored)")
        log_unsolved(puzzle_id, description, args.fail_log)
        status = EXIT_NO_SOLUTION

    if args.outfile:
        Path(args.outfile).write_text(json.dumps(_report(puzzle_id, moves, stats), indent=2))
        print("Report saved to", args.outfile)
    return status


__all__ = ["main"]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
