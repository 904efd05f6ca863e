"""Breadth-first goal placement at the farthest dead end."""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Tuple

from maze_vision.maze.grid import Cell, Grid


def count_open_neighbours(grid: Grid, cell: Cell) -> int:
    return sum(1 for nr, nc in grid.neighbours(*cell) if grid.is_path(nr, nc))


def bfs_distances(grid: Grid, entry: Cell) -> Dict[Cell, int]:
    """Return BFS depth for every path cell reachable from ``entry``.

    Keys are inserted in discovery order, which is also dequeue order.
    """

    if not grid.is_path(*entry):
        raise ValueError(f"entry {entry} is not a path cell")
    dist: Dict[Cell, int] = {entry: 0}
    queue: Deque[Cell] = deque([entry])
    while queue:
        r, c = queue.popleft()
        for nr, nc in grid.neighbours(r, c):
            if grid.is_path(nr, nc) and (nr, nc) not in dist:
                dist[(nr, nc)] = dist[(r, c)] + 1
                queue.append((nr, nc))
    return dist


def find_goal_with_distance(grid: Grid, entry: Cell) -> Tuple[Cell, int]:
    dist = bfs_distances(grid, entry)

    goal, goal_dist = None, 0
    farthest, farthest_dist = entry, 0
    for cell, depth in dist.items():
        if depth > farthest_dist:
            farthest, farthest_dist = cell, depth
        if cell != entry and count_open_neighbours(grid, cell) == 1 and depth > goal_dist:
            goal, goal_dist = cell, depth

    if goal is None:
        return farthest, farthest_dist
    return goal, goal_dist


def find_goal(grid: Grid, entry: Cell) -> Cell:
    """Pick the dead end farthest from ``entry``; ties go to the first one discovered.

    When no dead end exists the BFS-farthest path cell is used instead, so a
    goal is always produced.
    """

    return find_goal_with_distance(grid, entry)[0]


__all__ = ["bfs_distances", "count_open_neighbours", "find_goal", "find_goal_with_distance"]
