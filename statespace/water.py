"""statespace.water
=================

Water-pouring puzzle binding. Glasses have fixed capacities and start empty;
a move empties a glass, fills it from the tap, or pours one glass into
another until the source is empty or the destination is full. The goal is to
measure an exact amount in any glass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .path import Path
from .search import SearchConfig, SearchProblem, bfs_search, generations, iter_solutions

Levels = Tuple[int, ...]


@dataclass(frozen=True)
class Empty:
    glass: int

    def apply(self, state: Levels) -> Levels:
        return _updated(state, {self.glass: 0})

    def __str__(self) -> str:
        return f"Empty({self.glass})"


@dataclass(frozen=True)
class Fill:
    glass: int
    capacities: Levels = field(repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "capacities", tuple(self.capacities))
        _check_glass(self.glass, self.capacities)

    def apply(self, state: Levels) -> Levels:
        return _updated(state, {self.glass: self.capacities[self.glass]})

    def __str__(self) -> str:
        return f"Fill({self.glass})"


@dataclass(frozen=True)
class Pour:
    source: int
    target: int
    capacities: Levels = field(repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "capacities", tuple(self.capacities))
        _check_glass(self.source, self.capacities)
        _check_glass(self.target, self.capacities)
        if self.source == self.target:
            raise ValueError(f"cannot pour glass {self.source} into itself")

    def apply(self, state: Levels) -> Levels:
        amount = min(state[self.source], self.capacities[self.target] - state[self.target])
        return _updated(
            state,
            {self.source: state[self.source] - amount, self.target: state[self.target] + amount},
        )

    def __str__(self) -> str:
        return f"Pour({self.source},{self.target})"


def _check_glass(glass: int, capacities: Levels) -> None:
    if not 0 <= glass < len(capacities):
        raise ValueError(f"glass {glass} out of range for capacities {list(capacities)}")


def _updated(state: Levels, changes: Dict[int, int]) -> Levels:
    return tuple(changes.get(index, level) for index, level in enumerate(state))


class WaterPouring:
    """Glasses with the given capacities, all starting empty."""

    def __init__(self, capacities: Sequence[int]) -> None:
        caps = tuple(int(c) for c in capacities)
        if not caps:
            raise ValueError("at least one glass is required")
        if any(c <= 0 for c in caps):
            raise ValueError(f"capacities must be positive, got {list(caps)}")
        self.capacities: Levels = caps
        self.glasses = range(len(caps))
        self.initial_state: Levels = tuple(0 for _ in caps)
        # Enumeration order: every Empty, then every Fill, then every Pour.
        self.moves: Tuple[Any, ...] = (
            tuple(Empty(g) for g in self.glasses)
            + tuple(Fill(g, caps) for g in self.glasses)
            + tuple(Pour(src, dst, caps) for src in self.glasses for dst in self.glasses if src != dst)
        )

    def problem(self, target: int) -> SearchProblem:
        if target < 0:
            raise ValueError(f"target must be >= 0, got {target}")
        return SearchProblem(self.initial_state, self.moves, is_goal=lambda state: target in state)

    def path_sets(self, config: SearchConfig | None = None) -> Iterator[List[Path]]:
        """Frontiers of length 0, 1, 2, ... from the empty glasses."""

        return generations(SearchProblem(self.initial_state, self.moves, is_goal=lambda _state: False), config)

    def solutions(self, target: int, config: SearchConfig | None = None) -> Iterator[Path]:
        return iter_solutions(self.problem(target), config)

    def solution(self, target: int, config: SearchConfig | None = None) -> Optional[Path]:
        return bfs_search(self.problem(target), config)

    def move_named(self, text: str) -> Any:
        """Parse ``"Fill(0)"``-style text back into a move of this puzzle."""

        for move in self.moves:
            if str(move) == text.replace(" ", ""):
                return move
        raise KeyError(f"Unknown move {text!r}. Known moves: {[str(m) for m in self.moves]}")

    def replay(self, names: Iterable[str]) -> Levels:
        state = self.initial_state
        for name in names:
            state = self.move_named(name).apply(state)
        return state

    def describe(self) -> Dict[str, Any]:
        return {"kind": "water", "capacities": list(self.capacities)}


__all__ = ["Empty", "Fill", "Pour", "WaterPouring", "Levels"]
