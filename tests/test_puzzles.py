from __future__ import annotations

import itertools
import sys
from pathlib import Path as FsPath

ROOT = FsPath(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import numpy as np
import pytest

from statespace.blocks import BLOCK_MOVES, DOWN, LEFT, RIGHT, UP, Block, BlockPuzzle, Pos, get_move
from statespace.grid_utils import dims, make_terrain, on_terrain, walkable_cells
from statespace.replay import replay_moves, verify_path
from statespace.search import SearchConfig, SearchBudgetExhausted
from statespace.water import Empty, Fill, Pour, WaterPouring


def cells(rows):
    """Turn ``o``/``-`` sketches into 0/1 rows for readability in tests."""

    return [[0 if ch == "-" else 1 for ch in row] for row in rows]


LEVEL_1 = cells([
    "ooo-------",
    "oooooo----",
    "ooooooooo-",
    "-ooooooooo",
    "-----ooooo",
    "------ooo-",
])


def level_1() -> BlockPuzzle:
    return BlockPuzzle(LEVEL_1, start=(1, 1), goal=(4, 7))


# ---------------------------------------------------------------------------
# Terrain
# ---------------------------------------------------------------------------
def test_terrain_membership_level_1():
    terrain = make_terrain(LEVEL_1)
    assert on_terrain(terrain, (0, 0))
    assert on_terrain(terrain, (1, 1))
    assert on_terrain(terrain, (4, 7))
    assert on_terrain(terrain, (5, 8))
    assert not on_terrain(terrain, (5, 9))
    assert on_terrain(terrain, (4, 9))
    assert not on_terrain(terrain, (6, 8))
    assert not on_terrain(terrain, (4, 11))
    assert not on_terrain(terrain, (-1, 0))
    assert not on_terrain(terrain, (0, -1))


def test_make_terrain_shapes():
    terrain = make_terrain(np.ones((2, 3), dtype=int))
    assert dims(terrain) == (2, 3)
    assert walkable_cells(terrain) == 6
    assert dims(make_terrain(np.zeros((0, 0)))) == (0, 0)
    with pytest.raises(ValueError):
        make_terrain([[1, 1], [1]])
    with pytest.raises(ValueError):
        make_terrain([1, 1, 1])


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------
def test_block_rolls_from_standing():
    block = Block.standing_at(Pos(3, 3))
    assert block.right() == Block(Pos(3, 4), Pos(3, 5))
    assert block.left() == Block(Pos(3, 1), Pos(3, 2))
    assert block.up() == Block(Pos(1, 3), Pos(2, 3))
    assert block.down() == Block(Pos(4, 3), Pos(5, 3))


def test_block_rolls_when_lying():
    horizontal = Block(Pos(1, 2), Pos(1, 3))
    assert horizontal.right() == Block.standing_at(Pos(1, 4))
    assert horizontal.left() == Block.standing_at(Pos(1, 1))
    assert horizontal.up() == Block(Pos(0, 2), Pos(0, 3))
    vertical = Block(Pos(2, 4), Pos(3, 4))
    assert vertical.down() == Block.standing_at(Pos(4, 4))
    assert vertical.up() == Block.standing_at(Pos(1, 4))
    assert vertical.right() == Block(Pos(2, 5), Pos(3, 5))


def test_block_rejects_unordered_cells():
    with pytest.raises(ValueError):
        Block(Pos(2, 2), Pos(1, 2))


def test_block_neighbors_follow_move_order():
    neighbors = Block.standing_at(Pos(2, 2)).neighbors()
    assert [move for _, move in neighbors] == list(BLOCK_MOVES)
    assert neighbors[0][0] == LEFT.apply(Block.standing_at(Pos(2, 2)))


def test_get_move_lookup():
    assert get_move("down") is DOWN
    assert get_move("Up") is UP
    with pytest.raises(KeyError):
        get_move("sideways")


def test_start_and_goal_must_be_on_terrain():
    with pytest.raises(ValueError):
        BlockPuzzle(LEVEL_1, start=(0, 5), goal=(4, 7))
    with pytest.raises(ValueError):
        BlockPuzzle(LEVEL_1, start=(1, 1), goal=(9, 9))


def test_known_solution_for_level_1_reaches_goal():
    puzzle = level_1()
    known = [RIGHT, RIGHT, DOWN, RIGHT, RIGHT, RIGHT, DOWN]
    path = replay_moves(puzzle.start_block, known, puzzle.is_legal)
    assert path.end_state == puzzle.goal_block


def test_optimal_solution_for_level_1():
    puzzle = level_1()
    moves = puzzle.solution()
    assert len(moves) == 7
    path = replay_moves(puzzle.start_block, moves, puzzle.is_legal)
    assert path.end_state == puzzle.goal_block


def test_level_1_paths_to_goal_and_generations():
    puzzle = level_1()
    first = next(puzzle.paths_to_goal())
    assert len(first) == 7
    assert verify_path(puzzle.start_block, first, puzzle.is_legal)
    initial = next(puzzle.paths_from_start())
    assert [p.end_state for p in initial] == [puzzle.start_block]


def test_unreachable_goal_gives_empty_solution():
    puzzle = BlockPuzzle([[1, 1, 1, 0, 0, 1]], start=(0, 0), goal=(0, 5))
    assert puzzle.solution() == []


def test_start_on_goal():
    puzzle = BlockPuzzle([[1]], start=(0, 0), goal=(0, 0))
    assert puzzle.solution() == []
    assert len(next(puzzle.paths_to_goal())) == 0


# ---------------------------------------------------------------------------
# Water pouring
# ---------------------------------------------------------------------------
def test_water_moves_change_levels():
    caps = (4, 3)
    assert Empty(0).apply((4, 2)) == (0, 2)
    assert Fill(1, caps).apply((4, 0)) == (4, 3)
    assert Pour(0, 1, caps).apply((4, 1)) == (2, 3)
    assert Pour(1, 0, caps).apply((1, 3)) == (4, 0)


def test_water_move_enumeration_order():
    puzzle = WaterPouring([4, 3])
    assert [str(m) for m in puzzle.moves] == [
        "Empty(0)",
        "Empty(1)",
        "Fill(0)",
        "Fill(1)",
        "Pour(0,1)",
        "Pour(1,0)",
    ]


def test_water_four_three_target_two_is_minimal():
    puzzle = WaterPouring([4, 3])
    path = puzzle.solution(2)
    assert path is not None
    assert len(path) == 4
    assert 2 in path.end_state
    assert [str(m) for m in path.moves] == ["Fill(1)", "Pour(1,0)", "Fill(1)", "Pour(1,0)"]
    assert puzzle.replay(str(m) for m in path.moves) == path.end_state
    for length in range(4):
        for sequence in itertools.product(puzzle.moves, repeat=length):
            state = puzzle.initial_state
            for move in sequence:
                state = move.apply(state)
            assert 2 not in state


def test_water_classic_four_nine_target_six():
    path = WaterPouring([4, 9]).solution(6)
    assert path is not None
    assert 6 in path.end_state
    assert len(path) == 8


def test_water_unreachable_amount():
    # Both capacities are even, so an odd amount can never be measured.
    assert WaterPouring([2, 4]).solution(3) is None


def test_water_solutions_stream_grows():
    lengths = [len(p) for p in itertools.islice(WaterPouring([4, 3]).solutions(1), 3)]
    assert lengths == sorted(lengths)
    assert lengths[0] == 2


def test_water_path_sets_cover_reachable_space():
    frontiers = list(WaterPouring([4, 3]).path_sets())
    states = [p.end_state for frontier in frontiers for p in frontier]
    assert len(states) == len(set(states))
    assert (4, 2) in states


def test_water_budget_exhausted():
    with pytest.raises(SearchBudgetExhausted):
        WaterPouring([4, 9]).solution(6, SearchConfig(max_generations=2))


def test_water_rejects_bad_input():
    with pytest.raises(ValueError):
        WaterPouring([])
    with pytest.raises(ValueError):
        WaterPouring([3, 0])
    with pytest.raises(ValueError):
        WaterPouring([3]).problem(-1)
    with pytest.raises(ValueError):
        Pour(1, 1, (3, 3))
    with pytest.raises(KeyError):
        WaterPouring([3]).move_named("Pour(0,0)")


def test_water_moves_require_matching_capacities():
    with pytest.raises(TypeError):
        Fill(0)
    with pytest.raises(TypeError):
        Pour(0, 1)
    with pytest.raises(ValueError):
        Fill(2, (4, 3))
    with pytest.raises(ValueError):
        Pour(0, 5, (4, 3))
    assert Fill(0, (4,)) != Fill(0, (9,))
    assert len({Fill(0, (4,)), Fill(0, (9,))}) == 2
    assert Fill(0, [4, 3]) == Fill(0, (4, 3))
