from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Optional, Set, Tuple

from .logging_utils import note, warn
from .path import Path, apply_move
from .types import MoveApplier, Predicate, State


# -----------------------------------------------------------------------------
# Configs
# -----------------------------------------------------------------------------
@dataclass
class SearchConfig:
    """Configuration knobs for the breadth-first search.

    ``None`` for a limit means unbounded. ``max_generations`` caps the path
    length explored: a space that runs dry within the cap still reports no
    solution. ``time_budget_s`` is checked before each new generation is built.
    """

    max_generations: Optional[int] = None
    time_budget_s: Optional[float] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.max_generations is not None and self.max_generations < 0:
            raise ValueError(f"max_generations must be >= 0, got {self.max_generations}")
        if self.time_budget_s is not None and self.time_budget_s < 0:
            raise ValueError(f"time_budget_s must be >= 0, got {self.time_budget_s}")

    @property
    def bounded(self) -> bool:
        return self.max_generations is not None or self.time_budget_s is not None


@dataclass
class SearchStats:
    time_elapsed: float = 0.0
    generations: int = 0
    total_candidates: int = 0
    illegal_pruned: int = 0
    explored_pruned: int = 0
    explored_size: int = 0
    frontier_sizes: List[int] = field(default_factory=list)
    max_frontier_size: int = 0
    budget_exhausted: bool = False
    solution_length: Optional[int] = None

    def as_dict(self) -> dict:
        return dict(self.__dict__)


class SearchBudgetExhausted(RuntimeError):
    """Raised when a bounded search stops before finding a goal or running dry."""

    def __init__(self, stats: SearchStats, reason: str) -> None:
        super().__init__(f"search budget exhausted after {stats.generations} generation(s): {reason}")
        self.stats = stats
        self.reason = reason


def _always_legal(_state: Any) -> bool:
    return True


class SearchProblem:
    """Start state, move set and predicates, resolved once.

    ``moves`` is materialised into a tuple so the enumeration order is fixed
    for the lifetime of the problem; that order decides which of several
    equally short solutions is reported first.
    """

    def __init__(
        self,
        start: State,
        moves: Iterable[Any],
        is_goal: Predicate,
        is_legal: Predicate | None = None,
        apply: MoveApplier | None = None,
    ) -> None:
        self.start = start
        self.moves: Tuple[Any, ...] = tuple(moves)
        self.is_goal = is_goal
        self.is_legal = is_legal or _always_legal
        self.apply = apply or apply_move

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"SearchProblem(start={self.start!r}, moves={len(self.moves)})"


# -----------------------------------------------------------------------------
# Expansion
# -----------------------------------------------------------------------------
def neighbors_with_history(
    problem: SearchProblem,
    path: Path,
    stats: SearchStats | None = None,
) -> Iterator[Path]:
    """Yield every legal one-move extension of ``path`` in move order."""

    for move in problem.moves:
        candidate = path.extend(move, problem.apply)
        if stats is not None:
            stats.total_candidates += 1
        if not problem.is_legal(candidate.end_state):
            if stats is not None:
                stats.illegal_pruned += 1
            continue
        yield candidate


def new_neighbors_only(
    candidates: Iterable[Path],
    explored: Set[State],
    stats: SearchStats | None = None,
) -> List[Path]:
    """Keep the first candidate reaching each state not yet in ``explored``.

    ``explored`` is only read here; the caller commits the survivors' end
    states once the whole batch is known.
    """

    fresh: List[Path] = []
    claimed: Set[State] = set()
    for candidate in candidates:
        state = candidate.end_state
        if state in explored or state in claimed:
            if stats is not None:
                stats.explored_pruned += 1
            continue
        claimed.add(state)
        fresh.append(candidate)
    return fresh


# -----------------------------------------------------------------------------
# Generations
# -----------------------------------------------------------------------------
def generations(
    problem: SearchProblem,
    config: SearchConfig | None = None,
    stats: SearchStats | None = None,
) -> Iterator[List[Path]]:
    """Lazily yield frontiers of length 0, 1, 2, ... until one comes back empty.

    Generation ``k + 1`` is computed only when the consumer asks for it, from
    generation ``k`` and the states explored through ``k``. Each call builds
    its own explored set. Raises :class:`SearchBudgetExhausted` when the time
    budget is spent before the next generation is built, or when generation
    ``max_generations + 1`` turns out to be non-empty.
    """

    cfg = config or SearchConfig()
    stats = stats if stats is not None else SearchStats()
    started = time.perf_counter()

    explored: Set[State] = {problem.start}
    frontier: List[Path] = [Path.empty(problem.start)]
    stats.explored_size = len(explored)
    depth = 0

    while frontier:
        stats.generations = depth + 1
        stats.frontier_sizes.append(len(frontier))
        stats.max_frontier_size = max(stats.max_frontier_size, len(frontier))
        stats.time_elapsed = time.perf_counter() - started
        yield frontier

        if cfg.time_budget_s is not None and time.perf_counter() - started >= cfg.time_budget_s:
            stats.budget_exhausted = True
            raise SearchBudgetExhausted(stats, f"time_budget_s={cfg.time_budget_s}")

        candidates = (
            candidate
            for path in frontier
            for candidate in neighbors_with_history(problem, path, stats)
        )
        frontier = new_neighbors_only(candidates, explored, stats)
        explored.update(path.end_state for path in frontier)
        stats.explored_size = len(explored)
        depth += 1
        note(f"generation {depth}: {len(frontier)} new paths, {len(explored)} explored", cfg.verbose)
        if frontier and cfg.max_generations is not None and depth > cfg.max_generations:
            stats.budget_exhausted = True
            raise SearchBudgetExhausted(stats, f"max_generations={cfg.max_generations}")

    stats.time_elapsed = time.perf_counter() - started


def iter_solutions(
    problem: SearchProblem,
    config: SearchConfig | None = None,
    stats: SearchStats | None = None,
) -> Iterator[Path]:
    """Yield every goal-reaching path, shortest first."""

    for frontier in generations(problem, config, stats):
        for path in frontier:
            if problem.is_goal(path.end_state):
                yield path


# -----------------------------------------------------------------------------
# Drivers
# -----------------------------------------------------------------------------
def bfs_search(
    problem: SearchProblem,
    config: SearchConfig | None = None,
    stats: SearchStats | None = None,
) -> Optional[Path]:
    """Return a minimum-length path to a goal state, or ``None`` if none exists."""

    cfg = config or SearchConfig()
    stats = stats if stats is not None else SearchStats()
    for path in iter_solutions(problem, cfg, stats):
        stats.solution_length = len(path)
        note(f"solution of length {len(path)} found in generation {len(path)}", cfg.verbose)
        return path
    note(f"reachable space exhausted after {stats.generations} generation(s)", cfg.verbose)
    return None


def search(
    start: State,
    moves: Iterable[Any],
    is_legal: Predicate | None,
    is_goal: Predicate,
    config: SearchConfig | None = None,
    apply: MoveApplier | None = None,
) -> Optional[Path]:
    """Functional front door: build a :class:`SearchProblem` and search it."""

    problem = SearchProblem(start, moves, is_goal=is_goal, is_legal=is_legal, apply=apply)
    return bfs_search(problem, config)


def solve(
    problem: SearchProblem,
    config: SearchConfig | None = None,
) -> Tuple[Optional[Path], SearchStats]:
    """Like :func:`bfs_search` but reports an exhausted budget through the stats."""

    cfg = config or SearchConfig()
    stats = SearchStats()
    try:
        path = bfs_search(problem, cfg, stats)
    except SearchBudgetExhausted as exc:
        warn(str(exc), cfg.verbose)
        return None, stats
    return path, stats


__all__ = [
    "SearchConfig",
    "SearchStats",
    "SearchProblem",
    "SearchBudgetExhausted",
    "neighbors_with_history",
    "new_neighbors_only",
    "generations",
    "iter_solutions",
    "bfs_search",
    "search",
    "solve",
]
