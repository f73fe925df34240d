"""statespace.replay
==================

Helpers for turning a move list back into states: replaying a solution from
the start state, listing the states it visits, and checking that a returned
:class:`~statespace.path.Path` really is what it claims to be.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence

from .path import Path, apply_move
from .types import MoveApplier, Predicate, State


class IllegalMoveError(ValueError):
    """A replayed move landed on a state the legality predicate rejects."""

    def __init__(self, index: int, move: Any, state: Any) -> None:
        super().__init__(f"move #{index} ({move}) leads to illegal state {state!r}")
        self.index = index
        self.move = move
        self.state = state


def trace_states(
    start: State,
    moves: Iterable[Any],
    apply: MoveApplier | None = None,
) -> List[State]:
    """Return ``[start, s1, s2, ...]`` visited by applying ``moves`` in order."""

    applier = apply or apply_move
    states = [start]
    for move in moves:
        states.append(applier(move, states[-1]))
    return states


def replay_moves(
    start: State,
    moves: Sequence[Any],
    is_legal: Predicate | None = None,
    apply: MoveApplier | None = None,
) -> Path:
    """Rebuild the :class:`Path` for ``moves``, checking legality at every step."""

    path = Path.empty(start)
    for index, move in enumerate(moves):
        path = path.extend(move, apply)
        if is_legal is not None and not is_legal(path.end_state):
            raise IllegalMoveError(index, move, path.end_state)
    return path


def verify_path(
    start: State,
    path: Path,
    is_legal: Predicate | None = None,
    apply: MoveApplier | None = None,
) -> bool:
    """Check that replaying ``path.moves`` from ``start`` ends on ``path.end_state``.

    Raises :class:`IllegalMoveError` if an intermediate state is illegal.
    """

    rebuilt = replay_moves(start, path.moves, is_legal, apply)
    return rebuilt.end_state == path.end_state


__all__ = ["IllegalMoveError", "trace_states", "replay_moves", "verify_path"]
