"""statespace.blocks
==================

Block-sliding puzzle binding for the search engine. A 1x1x2 block stands on
one cell or lies across two. Each move tips or rolls it one step; the block
must keep both halves on the terrain, and the puzzle is solved when it stands
upright on the goal cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

import numpy as np

from .grid_utils import make_terrain, on_terrain
from .path import Path
from .search import SearchConfig, SearchProblem, bfs_search, generations, iter_solutions
from .types import Coord


@dataclass(frozen=True, order=True)
class Pos:
    row: int
    col: int

    def delta_row(self, d: int) -> "Pos":
        return Pos(self.row + d, self.col)

    def delta_col(self, d: int) -> "Pos":
        return Pos(self.row, self.col + d)

    def as_tuple(self) -> Coord:
        return self.row, self.col


@dataclass(frozen=True)
class Block:
    """The two cells covered by the block, ``b1`` never below or right of ``b2``."""

    b1: Pos
    b2: Pos

    def __post_init__(self) -> None:
        if self.b1.row > self.b2.row or self.b1.col > self.b2.col:
            raise ValueError(f"invalid block coordinates {self.b1} / {self.b2}")

    @classmethod
    def standing_at(cls, pos: Pos) -> "Block":
        return cls(pos, pos)

    @property
    def is_standing(self) -> bool:
        return self.b1 == self.b2

    @property
    def is_horizontal(self) -> bool:
        return not self.is_standing and self.b1.row == self.b2.row

    def delta_row(self, d1: int, d2: int) -> "Block":
        return Block(self.b1.delta_row(d1), self.b2.delta_row(d2))

    def delta_col(self, d1: int, d2: int) -> "Block":
        return Block(self.b1.delta_col(d1), self.b2.delta_col(d2))

    def left(self) -> "Block":
        if self.is_standing:
            return self.delta_col(-2, -1)
        if self.is_horizontal:
            return self.delta_col(-1, -2)
        return self.delta_col(-1, -1)

    def right(self) -> "Block":
        if self.is_standing:
            return self.delta_col(1, 2)
        if self.is_horizontal:
            return self.delta_col(2, 1)
        return self.delta_col(1, 1)

    def up(self) -> "Block":
        if self.is_standing:
            return self.delta_row(-2, -1)
        if self.is_horizontal:
            return self.delta_row(-1, -1)
        return self.delta_row(-1, -2)

    def down(self) -> "Block":
        if self.is_standing:
            return self.delta_row(1, 2)
        if self.is_horizontal:
            return self.delta_row(1, 1)
        return self.delta_row(2, 1)

    def neighbors(self) -> List[Tuple["Block", "BlockMove"]]:
        return [(move.apply(self), move) for move in BLOCK_MOVES]

    def is_legal(self, terrain: np.ndarray) -> bool:
        return on_terrain(terrain, self.b1.as_tuple()) and on_terrain(terrain, self.b2.as_tuple())

    def __str__(self) -> str:
        return f"Block({self.b1.as_tuple()}, {self.b2.as_tuple()})"


@dataclass(frozen=True)
class BlockMove:
    """One of the four directions; applying it rolls the block that way."""

    name: str

    def apply(self, block: Block) -> Block:
        return getattr(block, self.name.lower())()

    def __str__(self) -> str:
        return self.name


LEFT = BlockMove("Left")
RIGHT = BlockMove("Right")
UP = BlockMove("Up")
DOWN = BlockMove("Down")
BLOCK_MOVES: Tuple[BlockMove, ...] = (LEFT, RIGHT, UP, DOWN)
_MOVES_BY_NAME: Dict[str, BlockMove] = {move.name.lower(): move for move in BLOCK_MOVES}


def get_move(name: str) -> BlockMove:
    """Lookup a move by (case-insensitive) name with a helpful error."""

    try:
        return _MOVES_BY_NAME[name.lower()]
    except KeyError as exc:
        raise KeyError(f"Unknown block move {name!r}. Known moves: {[m.name for m in BLOCK_MOVES]}") from exc


class BlockPuzzle:
    """A terrain plus start and goal cells.

    Parameters
    ----------
    terrain:
        Rows of truthy/falsy cells (see :func:`~statespace.grid_utils.make_terrain`).
    start, goal:
        ``(row, col)`` cells, both of which must be on the terrain.
    """

    def __init__(self, terrain: Any, start: Coord, goal: Coord) -> None:
        self.terrain = make_terrain(terrain)
        self.start = Pos(*start)
        self.goal = Pos(*goal)
        for label, pos in (("start", self.start), ("goal", self.goal)):
            if not on_terrain(self.terrain, pos.as_tuple()):
                raise ValueError(f"{label} position {pos.as_tuple()} is not on the terrain")

    @property
    def start_block(self) -> Block:
        return Block.standing_at(self.start)

    @property
    def goal_block(self) -> Block:
        return Block.standing_at(self.goal)

    def is_legal(self, block: Block) -> bool:
        return block.is_legal(self.terrain)

    def done(self, block: Block) -> bool:
        return block == self.goal_block

    def problem(self) -> SearchProblem:
        return SearchProblem(self.start_block, BLOCK_MOVES, is_goal=self.done, is_legal=self.is_legal)

    def paths_from_start(self, config: SearchConfig | None = None) -> Iterator[List[Path]]:
        return generations(self.problem(), config)

    def paths_to_goal(self, config: SearchConfig | None = None) -> Iterator[Path]:
        return iter_solutions(self.problem(), config)

    def solution(self, config: SearchConfig | None = None) -> List[BlockMove]:
        """Shortest move list to the goal; empty when the goal is unreachable."""

        path = bfs_search(self.problem(), config)
        return [] if path is None else path.moves

    def describe(self) -> Dict[str, Any]:
        return {
            "kind": "blocks",
            "terrain": self.terrain.astype(int).tolist(),
            "start": list(self.start.as_tuple()),
            "goal": list(self.goal.as_tuple()),
        }


__all__ = [
    "Pos",
    "Block",
    "BlockMove",
    "LEFT",
    "RIGHT",
    "UP",
    "DOWN",
    "BLOCK_MOVES",
    "get_move",
    "BlockPuzzle",
]
