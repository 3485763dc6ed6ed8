"""Tests for greedy rectangle merging."""

from __future__ import annotations

import numpy as np

from ldtk.merge import Rectangle, merge_rectangles


def _coverage(rects: list[Rectangle], shape: tuple[int, int], cell_size: int) -> np.ndarray:
    """How many rectangles cover each cell."""
    counts = np.zeros(shape, dtype=int)
    for r in rects:
        x0, y0 = int(r.x) // cell_size, int(r.y) // cell_size
        w, h = int(r.width) // cell_size, int(r.height) // cell_size
        counts[y0:y0 + h, x0:x0 + w] += 1
    return counts


def test_square_block_merges_to_one():
    grid = [[1, 1, 0], [1, 1, 0], [0, 0, 0]]
    assert merge_rectangles(grid, 1, 10) == [Rectangle(x=0, y=0, width=20, height=20)]


def test_full_grid_single_rectangle():
    grid = np.full((4, 7), 3)
    rects = merge_rectangles(grid, 3, 8)
    assert rects == [Rectangle(0, 0, 56, 32)]


def test_isolated_cell():
    grid = np.zeros((5, 5), dtype=int)
    grid[2, 3] = 1
    assert merge_rectangles(grid, 1, 16) == [Rectangle(48, 32, 16, 16)]


def test_empty_grid():
    assert merge_rectangles([], 1, 16) == []
    assert merge_rectangles(np.zeros((0, 0), dtype=int), 1, 16) == []


def test_no_matching_cells():
    assert merge_rectangles([[0, 2], [2, 0]], 1, 16) == []


def test_width_first_then_height():
    """Row runs fix the width; lower rows join only when fully matching."""
    grid = [
        [1, 1],
        [1, 1],
        [1, 0],
    ]
    assert merge_rectangles(grid, 1, 1) == [
        Rectangle(0, 0, 2, 2),
        Rectangle(0, 2, 1, 1),
    ]


def test_greedy_order_is_not_minimal():
    """A column started at the top blocks the wider bottom row."""
    grid = [
        [0, 1],
        [1, 1],
    ]
    assert merge_rectangles(grid, 1, 1) == [
        Rectangle(1, 0, 1, 2),
        Rectangle(0, 1, 1, 1),
    ]


def test_visited_cells_stop_horizontal_growth():
    grid = [
        [0, 1, 0],
        [1, 1, 1],
    ]
    assert merge_rectangles(grid, 1, 1) == [
        Rectangle(1, 0, 1, 2),
        Rectangle(0, 1, 1, 1),
        Rectangle(2, 1, 1, 1),
    ]


def test_only_target_value_is_merged():
    grid = [[1, 2, 2], [1, 2, 2]]
    assert merge_rectangles(grid, 2, 4) == [Rectangle(4, 0, 8, 8)]
    assert merge_rectangles(grid, 1, 4) == [Rectangle(0, 0, 4, 8)]


def test_list_and_array_agree():
    grid = [[1, 0, 1], [1, 1, 1], [0, 1, 0]]
    assert merge_rectangles(grid, 1, 16) == merge_rectangles(np.array(grid), 1, 16)


def test_exact_cover_random_grids():
    """Union of rectangles equals the matching cells, with no overlap."""
    for seed in range(25):
        rng = np.random.default_rng(seed)
        shape = (int(rng.integers(1, 12)), int(rng.integers(1, 12)))
        grid = rng.integers(0, 3, size=shape)
        for value in (1, 2):
            rects = merge_rectangles(grid, value, 4)
            counts = _coverage(rects, shape, 4)
            np.testing.assert_array_equal(counts, (grid == value).astype(int))


def test_deterministic():
    rng = np.random.default_rng(7)
    grid = rng.integers(0, 2, size=(9, 13))
    assert merge_rectangles(grid, 1, 16) == merge_rectangles(grid, 1, 16)


def test_rectangle_center():
    assert Rectangle(16, 32, 32, 16).center == (32.0, 40.0)
