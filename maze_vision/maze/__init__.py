"""Maze generation: carving, obstacle classification and goal placement."""

__all__ = [
    "Grid",
    "WALL",
    "PATH",
    "carve",
    "Obstacle",
    "ObstacleType",
    "ObstacleClassifier",
    "find_goal",
    "bfs_distances",
    "MazeBuilder",
    "MazeConfig",
    "MazeDescription",
]

from .grid import Grid, WALL, PATH
from .carver import carve
from .obstacles import Obstacle, ObstacleType, ObstacleClassifier
from .goal import find_goal, bfs_distances
from .builder import MazeBuilder, MazeConfig, MazeDescription
