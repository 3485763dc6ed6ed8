"""Greedy rectangle merging over integer grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np


GridLike = Union[np.ndarray, Sequence[Sequence[int]]]


@dataclass(frozen=True)
class Rectangle:
    """Merged area in level pixel space."""
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


def merge_rectangles(grid: GridLike, value: int, cell_size: int) -> list[Rectangle]:
    """Cover every cell equal to ``value`` with non-overlapping rectangles.

    Cells are scanned row-major. Each unvisited match first grows right as far
    as it can, then grows down while the whole next row segment matches and is
    unvisited. The result is deterministic but not a minimum cover.
    """
    rectangles: list[Rectangle] = []
    if len(grid) == 0:
        return rectangles

    cells = np.asarray(grid)
    height, width = cells.shape
    matches = cells == value
    visited = np.zeros((height, width), dtype=bool)

    for y in range(height):
        for x in range(width):
            if not matches[y, x] or visited[y, x]:
                continue

            # Grow along the row
            rect_w = 1
            while x + rect_w < width and matches[y, x + rect_w] and not visited[y, x + rect_w]:
                rect_w += 1

            # Grow downward a full row segment at a time
            rect_h = 1
            while y + rect_h < height:
                row = slice(x, x + rect_w)
                if not matches[y + rect_h, row].all() or visited[y + rect_h, row].any():
                    break
                rect_h += 1

            visited[y:y + rect_h, x:x + rect_w] = True
            rectangles.append(Rectangle(
                x=float(x * cell_size),
                y=float(y * cell_size),
                width=float(rect_w * cell_size),
                height=float(rect_h * cell_size),
            ))

    return rectangles
