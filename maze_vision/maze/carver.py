"""Randomized depth-first carving over the odd-coordinate room lattice."""

from __future__ import annotations

import random
from typing import Iterator, List, Tuple

from maze_vision.maze.grid import Cell, Grid, WALL

STEP_DIRECTIONS: Tuple[Cell, ...] = ((0, 2), (0, -2), (2, 0), (-2, 0))


def _shuffled_directions(rng: random.Random) -> Iterator[Cell]:
    directions = list(STEP_DIRECTIONS)
    rng.shuffle(directions)
    return iter(directions)


def carve(grid: Grid, entry: Cell, rng: random.Random) -> None:
    """Carve a perfect maze into ``grid`` starting from ``entry``.

    Behaves like the classic recursive backtracker (visit the entry, shuffle
    the four step-2 directions, open the corridor to each unvisited room and
    descend into it) but keeps the pending directions of every room on an
    explicit stack, so large grids do not exhaust the call stack.
    """

    row, col = entry
    if not grid.is_interior(row, col):
        raise ValueError(f"entry {entry} must lie strictly inside the border")

    grid.set_path(row, col)
    stack: List[Tuple[Cell, Iterator[Cell]]] = [(entry, _shuffled_directions(rng))]

    while stack:
        (r, c), directions = stack[-1]
        for dr, dc in directions:
            nr, nc = r + dr, c + dc
            if grid.is_interior(nr, nc) and grid.cells[nr, nc] == WALL:
                grid.set_path(r + dr // 2, c + dc // 2)
                grid.set_path(nr, nc)
                stack.append(((nr, nc), _shuffled_directions(rng)))
                break
        else:
            stack.pop()


__all__ = ["carve", "STEP_DIRECTIONS"]
