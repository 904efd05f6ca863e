"""Obstacle types and the post-carving classification pass."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional

from maze_vision.maze.grid import Cell, Grid, WorldPosition, grid_to_world


class ObstacleType(Enum):
    SOLID = "solid"
    FAKE_WALL = "fake_wall"
    INVISIBLE_WALL = "invisible_wall"
    EXIT = "exit"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def is_disguised(self) -> bool:
        return self in (ObstacleType.FAKE_WALL, ObstacleType.INVISIBLE_WALL)


@dataclass
class Obstacle:
    """A placed maze object bound to one cell.

    ``revealed`` is purely visual: a fake wall stays passable and an invisible
    wall keeps blocking whatever its reveal state is.
    """

    cell: Cell
    kind: ObstacleType
    revealed: bool = False
    attached: bool = True

    @property
    def world_position(self) -> WorldPosition:
        return grid_to_world(*self.cell)

    @property
    def blocks_movement(self) -> bool:
        return self.kind in (ObstacleType.SOLID, ObstacleType.INVISIBLE_WALL)

    @property
    def is_visible(self) -> bool:
        if self.kind is ObstacleType.INVISIBLE_WALL:
            return self.revealed
        return True

    @property
    def looks_solid(self) -> bool:
        if self.kind is ObstacleType.SOLID:
            return True
        if self.kind is ObstacleType.FAKE_WALL:
            return not self.revealed
        return False

    def set_revealed(self, revealed: bool) -> None:
        self.revealed = bool(revealed)

    def detach(self) -> None:
        self.attached = False
        self.revealed = False

    def to_dict(self) -> Dict[str, object]:
        return {"cell": list(self.cell), "type": self.kind.tag, "revealed": self.revealed}


ObstacleTemplate = Callable[[Cell, ObstacleType], Obstacle]


def default_templates() -> Dict[ObstacleType, ObstacleTemplate]:
    return {kind: Obstacle for kind in ObstacleType}


def instantiate(
    templates: Mapping[ObstacleType, Optional[ObstacleTemplate]],
    cell: Cell,
    kind: ObstacleType,
    diagnostics: List[str],
) -> Optional[Obstacle]:
    """Build one obstacle from its template, recording a diagnostic when none exists."""

    template = templates.get(kind)
    if template is None:
        message = f"No {kind.tag} template available; skipped placement at {cell}"
        logging.warning(message)
        diagnostics.append(message)
        return None
    return template(cell, kind)


@dataclass
class ClassifiedObstacles:
    solid: List[Obstacle] = field(default_factory=list)
    fake_walls: List[Obstacle] = field(default_factory=list)
    invisible_walls: List[Obstacle] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)


def _validate_chance(name: str, value: float) -> float:
    chance = float(value)
    if not 0.0 <= chance <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")
    return chance


class ObstacleClassifier:
    """Assign a type to every wall cell and hide blocking obstacles on the paths."""

    def __init__(
        self,
        fake_wall_chance: float,
        invis_wall_chance: float,
        rng: random.Random,
        templates: Optional[Mapping[ObstacleType, Optional[ObstacleTemplate]]] = None,
    ) -> None:
        self.fake_wall_chance = _validate_chance("fake_wall_chance", fake_wall_chance)
        self.invis_wall_chance = _validate_chance("invis_wall_chance", invis_wall_chance)
        self.rng = rng
        self.templates = templates if templates is not None else default_templates()

    def classify(self, grid: Grid, entry: Cell) -> ClassifiedObstacles:
        result = ClassifiedObstacles()
        self._place_walls(grid, result)
        self._place_invisible_walls(grid, entry, result)
        return result

    def _place_walls(self, grid: Grid, result: ClassifiedObstacles) -> None:
        # One independent draw per interior wall cell; border cells never draw.
        for cell in grid.wall_cells():
            if not grid.is_border(*cell) and self.rng.random() < self.fake_wall_chance:
                obstacle = instantiate(self.templates, cell, ObstacleType.FAKE_WALL, result.diagnostics)
                if obstacle is not None:
                    result.fake_walls.append(obstacle)
            else:
                obstacle = instantiate(self.templates, cell, ObstacleType.SOLID, result.diagnostics)
                if obstacle is not None:
                    result.solid.append(obstacle)

    def _place_invisible_walls(self, grid: Grid, entry: Cell, result: ClassifiedObstacles) -> None:
        candidates = [
            cell for cell in grid.path_cells()
            if grid.is_interior(*cell) and cell != entry
        ]
        self.rng.shuffle(candidates)
        count = int(math.floor(len(candidates) * self.invis_wall_chance))
        for cell in candidates[:count]:
            obstacle = instantiate(self.templates, cell, ObstacleType.INVISIBLE_WALL, result.diagnostics)
            if obstacle is not None:
                result.invisible_walls.append(obstacle)


__all__ = [
    "ObstacleType",
    "Obstacle",
    "ObstacleTemplate",
    "ObstacleClassifier",
    "ClassifiedObstacles",
    "default_templates",
    "instantiate",
]
