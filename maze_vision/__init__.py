"""Procedural mazes with disguised obstacles and a perception meter."""

__all__ = [
    "AbstractMazeGenerator",
    "MazeBuilder",
    "MazeConfig",
    "MazeDescription",
    "Obstacle",
    "ObstacleType",
    "MeterConfig",
    "MeterState",
    "PerceptionMeter",
    "RevealBroadcaster",
    "MazeRun",
    "HudState",
]

from .base import AbstractMazeGenerator
from .maze import MazeBuilder, MazeConfig, MazeDescription, Obstacle, ObstacleType
from .perception import MeterConfig, MeterState, PerceptionMeter, RevealBroadcaster
from .run import HudState, MazeRun
