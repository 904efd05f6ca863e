"""Time-limited perception meter that reveals disguised obstacles while held.

The meter drains while the player holds perception and recharges while it is
released. Draining it to zero locks perception out until the meter recharges
to ``recharge_threshold`` of its capacity (or fills up completely), so a
player who keeps holding after depletion cannot immediately re-trigger it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from maze_vision.maze.builder import MazeDescription

RevealCallback = Callable[[bool], None]

_CONFIG_ALIASES = {
    "maxMeter": "max_meter",
    "drainRate": "drain_rate",
    "rechargeRate": "recharge_rate",
    "rechargeThreshold": "recharge_threshold",
}


@dataclass
class MeterConfig:
    max_meter: float = 3.0  # seconds of perception
    drain_rate: float = 1.0  # per second while held
    recharge_rate: float = 0.4  # per second while released
    recharge_threshold: float = 0.3

    def __post_init__(self) -> None:
        self.max_meter = float(self.max_meter)
        self.drain_rate = float(self.drain_rate)
        self.recharge_rate = float(self.recharge_rate)
        self.recharge_threshold = float(self.recharge_threshold)
        if self.max_meter <= 0:
            raise ValueError("max_meter must be positive")
        if self.drain_rate < 0 or self.recharge_rate < 0:
            raise ValueError("drain_rate and recharge_rate must not be negative")
        if not 0.0 < self.recharge_threshold < 1.0:
            raise ValueError("recharge_threshold must lie strictly between 0 and 1")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MeterConfig":
        known = {"max_meter", "drain_rate", "recharge_rate", "recharge_threshold"}
        kwargs: Dict[str, Any] = {}
        for key, value in payload.items():
            name = _CONFIG_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)


class MeterState(Enum):
    IDLE = "idle"
    DRAINING = "draining"
    LOCKED = "locked"
    RECHARGING = "recharging"


class PerceptionMeter:
    """Drain/recharge/lockout state machine driven by ``(held, dt)`` ticks."""

    def __init__(
        self,
        config: Optional[MeterConfig] = None,
        on_reveal: Optional[RevealCallback] = None,
    ) -> None:
        self.config = config if config is not None else MeterConfig()
        self.on_reveal = on_reveal
        self.current_meter = self.config.max_meter
        self.is_active = False
        self.is_charging = False

    @property
    def meter_ratio(self) -> float:
        return self.current_meter / self.config.max_meter

    @property
    def state(self) -> MeterState:
        if self.is_active:
            return MeterState.DRAINING
        if self.is_charging:
            return MeterState.LOCKED
        if self.current_meter < self.config.max_meter:
            return MeterState.RECHARGING
        return MeterState.IDLE

    def reset(self) -> None:
        if self.is_active:
            self._emit(False, [])
        self.current_meter = self.config.max_meter
        self.is_active = False
        self.is_charging = False

    def tick(self, held: bool, dt: float) -> List[bool]:
        """Advance the meter by ``dt`` seconds of real elapsed time.

        Returns the reveal events emitted during this tick, in order.
        """

        if dt < 0:
            raise ValueError(f"dt must not be negative, got {dt}")
        cfg = self.config
        events: List[bool] = []

        if held and not self.is_charging and self.current_meter > 0:
            if not self.is_active:
                self._emit(True, events)
            self.is_active = True

            self.current_meter -= cfg.drain_rate * dt
            if self.current_meter <= 0:
                self.current_meter = 0.0
                self._emit(False, events)
                self.is_active = False
                self.is_charging = True
                logging.debug("Perception meter depleted; locked until recharged")
        else:
            if self.is_active:
                self._emit(False, events)
                self.is_active = False

            self.current_meter = min(self.current_meter + cfg.recharge_rate * dt, cfg.max_meter)
            if self.current_meter >= cfg.max_meter:
                self.is_charging = False
            if self.is_charging and self.current_meter >= cfg.max_meter * cfg.recharge_threshold:
                self.is_charging = False
                logging.debug("Perception meter passed recharge threshold; unlocked")
        return events

    def _emit(self, on: bool, events: List[bool]) -> None:
        events.append(on)
        if self.on_reveal is not None:
            self.on_reveal(on)


class RevealBroadcaster:
    """Fan a reveal flag out to every disguised obstacle of the current maze."""

    def __init__(self, source: Callable[[], Optional[MazeDescription]]) -> None:
        self.source = source

    def __call__(self, on: bool) -> None:
        description = self.source()
        if description is None:
            return
        for obstacle in description.disguised_obstacles():
            if obstacle.attached:
                obstacle.set_revealed(on)


__all__ = ["MeterConfig", "MeterState", "PerceptionMeter", "RevealBroadcaster"]
