"""statespace.types
=================

Foundational type aliases and the move protocol shared by the search engine
and the puzzle bindings. Every module imports its aliases from here so that a
"state" or a "predicate" means the same thing everywhere.

The module stays definitions-only: importing it never triggers runtime side
effects.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Protocol, Tuple

# ---------------------------------------------------------------------------
# Core search representations
# ---------------------------------------------------------------------------
# States only need value equality and a hash; the engine never looks inside.
State = Hashable
Predicate = Callable[[Any], bool]
Coord = Tuple[int, int]


class Move(Protocol):
    """One atomic, pure state transformation.

    Implementations must not mutate ``state``. The result may be a state the
    legality predicate later rejects; the transform itself never checks.
    """

    def apply(self, state: Any) -> Any:
        ...


MoveApplier = Callable[[Any, Any], Any]


__all__ = [
    "State",
    "Predicate",
    "Coord",
    "Move",
    "MoveApplier",
]
