"""statespace.path
================

Move histories and paths for the search engine. A path is a move sequence
plus the state it reaches. Histories are persistent cons-lists: extending a
path allocates one link and shares the whole prefix with its parent, so a
generation of thousands of paths does not copy thousands of move lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional

from .types import Move, MoveApplier, State


@dataclass(frozen=True)
class MoveHistory:
    """Immutable link holding the most recent move and a pointer to the rest."""

    move: Any
    parent: Optional["MoveHistory"]
    length: int

    def push(self, move: Any) -> "MoveHistory":
        return MoveHistory(move, self, self.length + 1)

    def newest_first(self) -> Iterator[Any]:
        link: Optional[MoveHistory] = self
        while link is not None:
            yield link.move
            link = link.parent

    def to_list(self) -> List[Any]:
        """Return the moves oldest first."""

        moves = list(self.newest_first())
        moves.reverse()
        return moves


def apply_move(move: Move, state: State) -> State:
    """Default applier: delegate to ``move.apply``."""

    return move.apply(state)


class Path:
    """A move history together with its cached end state.

    The end state is stored, never recomputed by replaying the history.
    Instances are immutable; :meth:`extend` returns a new path.
    """

    __slots__ = ("_history", "_end_state")

    def __init__(self, end_state: State, history: Optional[MoveHistory] = None) -> None:
        self._end_state = end_state
        self._history = history

    @classmethod
    def empty(cls, start: State) -> "Path":
        """Zero-length path sitting on ``start``."""

        return cls(start, None)

    @property
    def end_state(self) -> State:
        return self._end_state

    @property
    def history(self) -> Optional[MoveHistory]:
        return self._history

    @property
    def moves(self) -> List[Any]:
        if self._history is None:
            return []
        return self._history.to_list()

    @property
    def last_move(self) -> Any | None:
        return None if self._history is None else self._history.move

    def extend(self, move: Any, apply: MoveApplier | None = None) -> "Path":
        """Return a new path with ``move`` appended and applied to the end state."""

        applier = apply or apply_move
        if self._history is None:
            history = MoveHistory(move, None, 1)
        else:
            history = self._history.push(move)
        return Path(applier(move, self._end_state), history)

    def __len__(self) -> int:
        return 0 if self._history is None else self._history.length

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return len(self) == len(other) and self._end_state == other._end_state and self.moves == other.moves

    def __hash__(self) -> int:
        return hash((self._end_state, len(self)))

    def __str__(self) -> str:
        return " ".join(str(move) for move in self.moves) + "-->" + str(self._end_state)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Path({self})"


__all__ = ["MoveHistory", "Path", "apply_move"]
