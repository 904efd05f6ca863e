"""Run loop: generate a maze, wait for the goal, regenerate after a short delay."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from maze_vision.maze.builder import MazeBuilder, MazeDescription
from maze_vision.maze.grid import WorldPosition
from maze_vision.perception.meter import PerceptionMeter, RevealBroadcaster

HEALTHY_BAR_COLOR = (77, 204, 77)
LOW_BAR_COLOR = (230, 77, 26)
LOW_METER_RATIO = 0.4
GOAL_MESSAGE = "You felt it."


@dataclass
class HudState:
    """What a heads-up display needs to draw the meter; nothing is drawn here."""

    meter_ratio: float
    seconds_label: str
    bar_color: Tuple[int, int, int]
    message: Optional[str] = None


class MazeRun:
    """Owns the current maze and drives the perception meter each tick.

    Collaborators are passed in explicitly. The meter's reveal callback is
    wired to this run's builder unless the meter already has one.
    """

    def __init__(
        self,
        builder: MazeBuilder,
        meter: PerceptionMeter,
        *,
        restart_delay: float = 1.5,
        on_start: Optional[Callable[[WorldPosition], None]] = None,
    ) -> None:
        if restart_delay < 0:
            raise ValueError("restart_delay must not be negative")
        self.builder = builder
        self.meter = meter
        self.restart_delay = float(restart_delay)
        self.on_start = on_start
        self.goal_reached = False
        self.runs_completed = 0
        self._goal_timer = 0.0
        if self.meter.on_reveal is None:
            self.meter.on_reveal = RevealBroadcaster(lambda: self.builder.current)

    @property
    def maze(self) -> Optional[MazeDescription]:
        return self.builder.current

    def start(self) -> MazeDescription:
        self.goal_reached = False
        self._goal_timer = 0.0
        description = self.builder.generate()
        if self.on_start is not None:
            self.on_start(description.entry_world_position)
        # Fresh obstacles start hidden; keep them in step with an active meter.
        if self.meter.is_active and self.meter.on_reveal is not None:
            self.meter.on_reveal(True)
        return description

    def on_goal_reached(self) -> None:
        if self.goal_reached:
            return
        self.goal_reached = True
        self._goal_timer = 0.0
        self.runs_completed += 1
        logging.info(f"Goal reached; run {self.runs_completed} complete")

    def update(self, held: bool, dt: float) -> List[bool]:
        events = self.meter.tick(held, dt)
        if self.goal_reached:
            self._goal_timer += dt
            if self._goal_timer >= self.restart_delay:
                self.start()
        return events

    def hud(self) -> HudState:
        ratio = self.meter.meter_ratio
        seconds = math.ceil(self.meter.current_meter * 10) / 10.0
        return HudState(
            meter_ratio=ratio,
            seconds_label=f"{seconds:.1f}s",
            bar_color=HEALTHY_BAR_COLOR if ratio > LOW_METER_RATIO else LOW_BAR_COLOR,
            message=GOAL_MESSAGE if self.goal_reached else None,
        )


__all__ = ["HudState", "MazeRun"]
