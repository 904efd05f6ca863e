"""Maze generation pipeline: carve, classify obstacles, place the goal."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from maze_vision.maze.carver import carve
from maze_vision.maze.goal import find_goal_with_distance
from maze_vision.maze.grid import Cell, Grid, WorldPosition, grid_to_world, normalize_dimension
from maze_vision.maze.obstacles import (
    Obstacle,
    ObstacleClassifier,
    ObstacleTemplate,
    ObstacleType,
    default_templates,
    instantiate,
)

ENTRY: Cell = (1, 1)

FLOOR_Y_OFFSET = -1.0
ROOF_Y_OFFSET = 1.7

# Option names as they appear in external config files.
_CONFIG_ALIASES = {
    "fakeWallChance": "fake_wall_chance",
    "invisWallChance": "invis_wall_chance",
}


@dataclass
class MazeConfig:
    """Generation options. Grid sizes are normalized to odd values of at least 11."""

    rows: int = 15
    cols: int = 15
    fake_wall_chance: float = 0.15
    invis_wall_chance: float = 0.10

    def __post_init__(self) -> None:
        self.rows = normalize_dimension(self.rows)
        self.cols = normalize_dimension(self.cols)
        for name in ("fake_wall_chance", "invis_wall_chance"):
            value = float(getattr(self, name))
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
            setattr(self, name, value)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MazeConfig":
        known = {"rows", "cols", "fake_wall_chance", "invis_wall_chance"}
        kwargs: Dict[str, Any] = {}
        for key, value in payload.items():
            name = _CONFIG_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "fake_wall_chance": self.fake_wall_chance,
            "invis_wall_chance": self.invis_wall_chance,
        }


@dataclass(frozen=True)
class Surface:
    """Floor or roof slab spanning the whole maze."""

    name: str
    position: WorldPosition
    scale: Tuple[float, float, float]

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "position": list(self.position), "scale": list(self.scale)}


def _surface(name: str, rows: int, cols: int, y: float) -> Surface:
    return Surface(
        name=name,
        position=((cols - 1) / 2.0, y, (rows - 1) / 2.0),
        scale=(float(cols), 1.0, float(rows)),
    )


@dataclass
class MazeDescription:
    """Complete, immutable-by-convention output of one ``MazeBuilder.generate`` call."""

    generation: int
    grid: Grid
    entry: Cell
    goal: Cell
    goal_distance: int
    solid_walls: Tuple[Obstacle, ...]
    fake_walls: Tuple[Obstacle, ...]
    invisible_walls: Tuple[Obstacle, ...]
    exit: Optional[Obstacle]
    floor: Surface
    roof: Surface
    diagnostics: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def cols(self) -> int:
        return self.grid.cols

    @property
    def entry_world_position(self) -> WorldPosition:
        return grid_to_world(*self.entry)

    @property
    def goal_world_position(self) -> WorldPosition:
        return grid_to_world(*self.goal)

    def disguised_obstacles(self) -> Tuple[Obstacle, ...]:
        return self.fake_walls + self.invisible_walls

    def all_obstacles(self) -> Tuple[Obstacle, ...]:
        extra = (self.exit,) if self.exit is not None else ()
        return self.solid_walls + self.fake_walls + self.invisible_walls + extra

    def obstacle_map(self) -> Dict[Cell, Obstacle]:
        """Map each occupied cell to its wall or invisible-wall obstacle."""
        return {o.cell: o for o in self.solid_walls + self.fake_walls + self.invisible_walls}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generation": self.generation,
            "grid_size": [self.rows, self.cols],
            "maze_grid": self.grid.to_list(),
            "entry": list(self.entry),
            "goal": list(self.goal),
            "goal_distance": self.goal_distance,
            "entry_world_position": list(self.entry_world_position),
            "goal_world_position": list(self.goal_world_position),
            "fake_walls": [list(o.cell) for o in self.fake_walls],
            "invisible_walls": [list(o.cell) for o in self.invisible_walls],
            "solid_wall_count": len(self.solid_walls),
            "floor": self.floor.to_dict(),
            "roof": self.roof.to_dict(),
            "diagnostics": list(self.diagnostics),
        }


class MazeBuilder:
    """Single owner of maze state; every call to ``generate`` replaces the previous maze."""

    def __init__(
        self,
        config: Optional[MazeConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        templates: Optional[Mapping[ObstacleType, Optional[ObstacleTemplate]]] = None,
    ) -> None:
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")
        self.config = config if config is not None else MazeConfig()
        self._rng = rng if rng is not None else random.Random(seed)
        self.templates = templates if templates is not None else default_templates()
        self._current: Optional[MazeDescription] = None
        self._generation = 0

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def current(self) -> Optional[MazeDescription]:
        return self._current

    def teardown(self) -> None:
        """Detach every obstacle of the current maze and forget it."""

        previous, self._current = self._current, None
        if previous is None:
            return
        for obstacle in previous.all_obstacles():
            obstacle.detach()

    def generate(self, config: Optional[MazeConfig] = None) -> MazeDescription:
        if config is not None:
            self.config = config
        cfg = self.config

        self.teardown()

        grid = Grid(cfg.rows, cfg.cols)
        carve(grid, ENTRY, self._rng)

        classifier = ObstacleClassifier(
            cfg.fake_wall_chance,
            cfg.invis_wall_chance,
            self._rng,
            templates=self.templates,
        )
        classified = classifier.classify(grid, ENTRY)

        goal, goal_distance = find_goal_with_distance(grid, ENTRY)
        diagnostics: List[str] = list(classified.diagnostics)
        exit_marker = instantiate(self.templates, goal, ObstacleType.EXIT, diagnostics)

        self._generation += 1
        description = MazeDescription(
            generation=self._generation,
            grid=grid,
            entry=ENTRY,
            goal=goal,
            goal_distance=goal_distance,
            solid_walls=tuple(classified.solid),
            fake_walls=tuple(classified.fake_walls),
            invisible_walls=tuple(classified.invisible_walls),
            exit=exit_marker,
            floor=_surface("Floor", cfg.rows, cfg.cols, FLOOR_Y_OFFSET),
            roof=_surface("Roof", cfg.rows, cfg.cols, ROOF_Y_OFFSET),
            diagnostics=tuple(diagnostics),
        )
        self._current = description
        logging.info(
            f"Generated maze #{description.generation} ({cfg.rows}x{cfg.cols}): "
            f"{len(description.fake_walls)} fake walls, {len(description.invisible_walls)} invisible walls, "
            f"goal {goal} at distance {goal_distance}"
        )
        return description


__all__ = ["ENTRY", "MazeBuilder", "MazeConfig", "MazeDescription", "Surface"]
