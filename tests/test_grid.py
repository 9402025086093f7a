from __future__ import annotations

import random

import pytest

from wuxing.elements import Element
from wuxing.grid import Board
from wuxing.types import Bubble


def test_neighbors4_respects_bounds(board: Board) -> None:
    assert board.neighbors4(0, 0) == [(1, 0), (0, 1)]
    assert board.neighbors4(11, 8) == [(10, 8), (11, 7)]
    assert board.neighbors4(5, 4) == [(4, 4), (6, 4), (5, 3), (5, 5)]


def test_cell_world_round_trip_on_centres(board: Board) -> None:
    for r, c in [(0, 0), (3, 7), (11, 8)]:
        x, y = board.cell_to_world(r, c)
        assert board.world_to_cell(x, y) == (r, c)


def test_world_to_cell_can_leave_bounds(board: Board) -> None:
    r, c = board.world_to_cell(board.origin_x - 1, board.origin_y - 1)
    assert (r, c) == (-1, -1)
    assert not board.in_bounds(r, c)
    assert board.get(r, c) is None


def test_set_out_of_bounds_raises(board: Board) -> None:
    with pytest.raises(IndexError):
        board.set(board.rows, 0, Bubble(Element.WOOD))


def test_seed_fills_only_requested_rows(board: Board, rng: random.Random) -> None:
    board.seed(4, 1.0, rng)
    for r, c, bubble in board.iter_cells():
        if r < 4:
            assert bubble is not None and bubble.level == 1
        else:
            assert bubble is None


def test_seed_with_zero_probability_leaves_board_empty(board: Board, rng: random.Random) -> None:
    board.seed(4, 0.0, rng)
    assert board.occupied_count() == 0


def test_pressure_shifts_rows_down(board: Board, rng: random.Random) -> None:
    board.seed(3, 0.7, rng)
    before = board.snapshot()

    assert board.apply_pressure(1.0, rng) is True

    after = board.snapshot()
    for r in range(1, board.rows):
        assert after[r] == before[r - 1]
    assert all(cell is not None for cell in after[0])


def test_pressure_with_zero_spawn_empties_top_row(board: Board, rng: random.Random) -> None:
    board.seed(1, 1.0, rng)
    board.apply_pressure(0.0, rng)
    assert all(cell is None for cell in board.row(0))
    assert all(cell is not None for cell in board.row(1))


def test_pressure_blocked_by_bottom_row_occupant(board: Board, rng: random.Random) -> None:
    board.seed(2, 1.0, rng)
    board.set(board.rows - 1, 3, Bubble(Element.METAL))
    before = board.snapshot()

    assert board.apply_pressure(1.0, rng) is False
    assert board.snapshot() == before


def test_game_over_row(board: Board) -> None:
    assert board.danger_row == 11
    assert board.is_game_over_row(11)
    assert not board.is_game_over_row(10)


def test_best_adjacent_empty_picks_closest_neighbour(board: Board) -> None:
    board.set(5, 4, Bubble(Element.EARTH))
    x, y = board.cell_to_world(5, 4)
    # Approaching from below and slightly right.
    assert board.best_adjacent_empty(5, 4, x + 5, y + 20) == (6, 4)
    board.set(6, 4, Bubble(Element.FIRE))
    assert board.best_adjacent_empty(5, 4, x + 5, y + 20) == (5, 5)


def test_best_adjacent_empty_none_when_surrounded(board: Board) -> None:
    board.set(5, 4, Bubble(Element.EARTH))
    for r, c in board.neighbors4(5, 4):
        board.set(r, c, Bubble(Element.WOOD))
    x, y = board.cell_to_world(5, 4)
    assert board.best_adjacent_empty(5, 4, x, y) is None


def test_nearest_empty_in_row_scans_left_first(board: Board) -> None:
    for c in range(board.cols):
        board.set(0, c, Bubble(Element.WATER))
    board.clear(0, 2)
    board.clear(0, 6)
    assert board.nearest_empty_in_row(0, 4) == (0, 2)
    board.set(0, 2, Bubble(Element.WATER))
    assert board.nearest_empty_in_row(0, 4) == (0, 6)
    board.set(0, 6, Bubble(Element.WATER))
    assert board.nearest_empty_in_row(0, 4) is None


def test_clamp_cell(board: Board) -> None:
    assert board.clamp_cell(-3, 20) == (0, board.cols - 1)
    assert board.clamp_cell(4, 4) == (4, 4)


def test_snapshot_reports_element_and_level(board: Board) -> None:
    bubble = Bubble(Element.FIRE)
    bubble.grow()
    board.set(2, 3, bubble)
    snap = board.snapshot()
    assert snap[2][3] == (Element.FIRE, 2)
    assert snap[0][0] is None
    assert len(snap) == board.rows and len(snap[0]) == board.cols


def test_bubble_growth_caps_at_three() -> None:
    bubble = Bubble(Element.WOOD)
    assert bubble.grow() and bubble.grow()
    assert bubble.level == 3
    assert bubble.grow() is False
    assert bubble.level == 3
