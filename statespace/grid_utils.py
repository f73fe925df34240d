from __future__ import annotations

from typing import Any, Tuple

import numpy as np

from .types import Coord


# ---------------------------------------------------------------------------
# Terrain helpers
# ---------------------------------------------------------------------------
def make_terrain(cells: Any) -> np.ndarray:
    """Return ``cells`` as a 2-D boolean array, ``True`` where standing is allowed.

    Parameters
    ----------
    cells:
        Anything ``numpy`` can turn into a rectangular 2-D array: nested lists
        of 0/1, booleans, or an existing array.

    Raises
    ------
    ValueError
        If the input is ragged or not two-dimensional.
    """

    try:
        terrain = np.asarray(cells, dtype=bool)
    except ValueError as exc:
        raise ValueError(f"terrain rows must all have the same length: {exc}") from exc
    if terrain.ndim != 2:
        raise ValueError(f"terrain must be two-dimensional, got shape {terrain.shape}")
    return terrain


def dims(terrain: np.ndarray) -> Tuple[int, int]:
    """Return ``(rows, cols)``; an empty terrain is ``(0, 0)``."""

    if terrain.size == 0:
        return 0, 0
    rows, cols = terrain.shape
    return int(rows), int(cols)


def on_terrain(terrain: np.ndarray, pos: Coord) -> bool:
    """``True`` if ``pos`` lies inside the array and on a walkable cell.

    Negative coordinates count as off the terrain rather than wrapping around.
    """

    row, col = pos
    rows, cols = dims(terrain)
    if not (0 <= row < rows and 0 <= col < cols):
        return False
    return bool(terrain[row, col])


def walkable_cells(terrain: np.ndarray) -> int:
    return int(np.count_nonzero(terrain))


__all__ = ["make_terrain", "dims", "on_terrain", "walkable_cells"]
