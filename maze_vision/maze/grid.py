"""Rectangular wall/path cell table shared by every maze generation step."""

from __future__ import annotations

from typing import Iterator, List, Tuple

import numpy as np

WALL = 0
PATH = 1

MIN_DIMENSION = 11

Cell = Tuple[int, int]
WorldPosition = Tuple[float, float, float]

NEIGHBOUR_OFFSETS: Tuple[Cell, ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


def normalize_dimension(value: int) -> int:
    """Round ``value`` up to the next odd number and floor it at ``MIN_DIMENSION``.

    Out-of-range sizes are corrected silently rather than rejected.
    """

    size = int(value)
    if size % 2 == 0:
        size += 1
    return max(size, MIN_DIMENSION)


def normalize_dimensions(rows: int, cols: int) -> Tuple[int, int]:
    return normalize_dimension(rows), normalize_dimension(cols)


def grid_to_world(row: int, col: int) -> WorldPosition:
    """Map a cell to its world position (x = col, y = 0, z = row)."""
    return (float(col), 0.0, float(row))


class Grid:
    """Fixed-size table of WALL/PATH cells backed by a numpy array."""

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 3 or cols < 3:
            raise ValueError("grid must be at least 3x3 to hold an interior cell")
        self.rows = int(rows)
        self.cols = int(cols)
        self.cells = np.full((self.rows, self.cols), WALL, dtype=np.uint8)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_interior(self, row: int, col: int) -> bool:
        return 0 < row < self.rows - 1 and 0 < col < self.cols - 1

    def is_border(self, row: int, col: int) -> bool:
        return row in (0, self.rows - 1) or col in (0, self.cols - 1)

    def is_path(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and self.cells[row, col] == PATH

    def set_path(self, row: int, col: int) -> None:
        self.cells[row, col] = PATH

    def path_cells(self) -> List[Cell]:
        return [(int(r), int(c)) for r, c in np.argwhere(self.cells == PATH)]

    def wall_cells(self) -> List[Cell]:
        return [(int(r), int(c)) for r, c in np.argwhere(self.cells == WALL)]

    def neighbours(self, row: int, col: int) -> Iterator[Cell]:
        """Yield in-bounds 4-neighbours in right, left, down, up order."""
        for dr, dc in NEIGHBOUR_OFFSETS:
            nr, nc = row + dr, col + dc
            if self.in_bounds(nr, nc):
                yield nr, nc

    def path_count(self) -> int:
        return int(np.count_nonzero(self.cells == PATH))

    def to_list(self) -> List[List[int]]:
        return self.cells.tolist()

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols}, path_cells={self.path_count()})"


__all__ = [
    "WALL",
    "PATH",
    "MIN_DIMENSION",
    "Cell",
    "WorldPosition",
    "Grid",
    "grid_to_world",
    "normalize_dimension",
    "normalize_dimensions",
]
