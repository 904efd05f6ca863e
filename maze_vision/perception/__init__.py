"""Perception meter and reveal fan-out."""

__all__ = [
    "MeterConfig",
    "MeterState",
    "PerceptionMeter",
    "RevealBroadcaster",
]

from .meter import MeterConfig, MeterState, PerceptionMeter, RevealBroadcaster
