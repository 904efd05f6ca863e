"""Top-down preview images of generated mazes."""

from __future__ import annotations

from typing import Dict, Tuple

from PIL import Image, ImageDraw

from maze_vision.maze.builder import MazeDescription
from maze_vision.maze.grid import Cell
from maze_vision.maze.obstacles import Obstacle, ObstacleType

WALL_COLOR = (30, 30, 30)
PATH_COLOR = (235, 235, 235)
FAKE_WALL_COLOR = (140, 140, 140)
FAKE_WALL_REVEALED_COLOR = (255, 51, 51)
INVISIBLE_WALL_REVEALED_COLOR = (51, 102, 255)
ENTRY_COLOR = (220, 30, 30)
GOAL_COLOR = (26, 230, 51)

DEFAULT_CELL_SIZE = 24


def _cell_color(
    description: MazeDescription,
    obstacles: Dict[Cell, Obstacle],
    cell: Cell,
    revealed: bool,
) -> Tuple[int, int, int]:
    if cell == description.entry:
        return ENTRY_COLOR
    if cell == description.goal:
        return GOAL_COLOR
    obstacle = obstacles.get(cell)
    if obstacle is None:
        return PATH_COLOR if description.grid.is_path(*cell) else WALL_COLOR
    if obstacle.kind is ObstacleType.FAKE_WALL:
        return FAKE_WALL_REVEALED_COLOR if revealed else FAKE_WALL_COLOR
    if obstacle.kind is ObstacleType.INVISIBLE_WALL:
        return INVISIBLE_WALL_REVEALED_COLOR if revealed else PATH_COLOR
    return WALL_COLOR


def render_maze(
    description: MazeDescription,
    *,
    cell_size: int = DEFAULT_CELL_SIZE,
    revealed: bool = False,
) -> Image.Image:
    """Draw every cell of the maze as a filled square.

    With ``revealed`` the disguised obstacles are shown the way the perception
    meter exposes them; otherwise they look like their surroundings.
    """

    if cell_size <= 0:
        raise ValueError("cell_size must be positive")
    canvas = Image.new("RGB", (description.cols * cell_size, description.rows * cell_size), WALL_COLOR)
    draw = ImageDraw.Draw(canvas)
    obstacles = description.obstacle_map()
    for r in range(description.rows):
        for c in range(description.cols):
            left = c * cell_size
            top = r * cell_size
            fill = _cell_color(description, obstacles, (r, c), revealed)
            draw.rectangle((left, top, left + cell_size - 1, top + cell_size - 1), fill=fill)
    return canvas


__all__ = ["render_maze", "DEFAULT_CELL_SIZE"]
