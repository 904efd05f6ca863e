import random

import pytest

from maze_vision.maze.builder import MazeBuilder, MazeConfig
from maze_vision.perception.meter import MeterConfig, MeterState, PerceptionMeter, RevealBroadcaster


def _meter(**overrides):
    options = {"max_meter": 3.0, "drain_rate": 1.0, "recharge_rate": 1.0, "recharge_threshold": 0.3}
    options.update(overrides)
    events = []
    meter = PerceptionMeter(MeterConfig(**options), on_reveal=events.append)
    return meter, events


def test_depletion_locks_and_partial_recharge_unlocks():
    meter, events = _meter()
    for _ in range(12):
        meter.tick(True, 0.25)
    assert meter.current_meter == 0.0
    assert meter.state is MeterState.LOCKED
    assert events == [True, False]

    meter.tick(False, 0.5)
    assert meter.state is MeterState.LOCKED

    meter.tick(False, 0.4)
    assert meter.current_meter == pytest.approx(0.9)
    assert not meter.is_charging
    assert meter.state is MeterState.RECHARGING

    assert meter.tick(True, 0.1) == [True]


def test_holding_through_lockout_does_not_reactivate_before_threshold():
    meter, events = _meter()
    meter.tick(True, 3.0)
    assert events == [True, False]
    assert meter.is_charging

    for expected in (0.25, 0.5, 0.75):
        assert meter.tick(True, 0.25) == []
        assert meter.current_meter == pytest.approx(expected)
        assert meter.is_charging

    # Crossing the threshold clears the lock on this tick; reveal waits for the next.
    assert meter.tick(True, 0.25) == []
    assert not meter.is_charging
    assert meter.tick(True, 0.25) == [True]
    assert meter.is_active


def test_release_hides_and_recharges():
    meter, events = _meter(recharge_rate=0.4)
    assert meter.tick(True, 1.0) == [True]
    assert meter.state is MeterState.DRAINING
    assert meter.tick(False, 1.0) == [False]
    assert meter.current_meter == pytest.approx(2.4)
    assert events == [True, False]


def test_single_long_tick_reveals_and_hides():
    meter, _ = _meter()
    assert meter.tick(True, 10.0) == [True, False]
    assert meter.current_meter == 0.0


def test_recharge_clamps_to_max_and_goes_idle():
    meter, _ = _meter()
    meter.tick(True, 1.0)
    meter.tick(False, 100.0)
    assert meter.current_meter == 3.0
    assert meter.meter_ratio == 1.0
    assert meter.state is MeterState.IDLE


def test_drain_is_proportional_to_elapsed_time():
    fine, _ = _meter()
    coarse, _ = _meter()
    for _ in range(16):
        fine.tick(True, 0.0625)
    coarse.tick(True, 1.0)
    assert fine.current_meter == pytest.approx(coarse.current_meter)
    assert coarse.meter_ratio == pytest.approx(2.0 / 3.0)


def test_meter_stays_in_bounds_for_random_input():
    rng = random.Random(1234)
    meter, _ = _meter(recharge_rate=0.4)
    for _ in range(2000):
        meter.tick(rng.random() < 0.6, rng.uniform(0.0, 0.5))
        assert 0.0 <= meter.current_meter <= meter.config.max_meter
        if meter.is_active:
            assert meter.current_meter > 0
        if meter.is_charging:
            assert not meter.is_active


def test_negative_dt_is_rejected():
    meter, _ = _meter()
    with pytest.raises(ValueError):
        meter.tick(True, -0.1)


@pytest.mark.parametrize(
    "options",
    [
        {"max_meter": 0.0},
        {"drain_rate": -1.0},
        {"recharge_threshold": 0.0},
        {"recharge_threshold": 1.0},
    ],
)
def test_invalid_config_is_rejected(options):
    with pytest.raises(ValueError):
        MeterConfig(**options)


def test_config_from_dict_accepts_camel_case():
    config = MeterConfig.from_dict({"maxMeter": 5, "rechargeThreshold": 0.5, "drainRate": 2})
    assert config.max_meter == 5.0
    assert config.drain_rate == 2.0
    assert config.recharge_rate == 0.4
    assert config.recharge_threshold == 0.5


def test_reset_refills_and_hides():
    meter, events = _meter()
    meter.tick(True, 1.0)
    meter.reset()
    assert events == [True, False]
    assert meter.current_meter == 3.0
    assert meter.state is MeterState.IDLE


def test_broadcaster_reveals_current_maze_only():
    builder = MazeBuilder(MazeConfig(fake_wall_chance=0.3, invis_wall_chance=0.2), seed=17)
    first = builder.generate()
    second = builder.generate()
    meter = PerceptionMeter(on_reveal=RevealBroadcaster(lambda: builder.current))

    meter.tick(True, 0.1)
    assert second.disguised_obstacles()
    assert all(o.revealed for o in second.disguised_obstacles())
    assert not any(o.revealed for o in first.disguised_obstacles())
    assert not any(o.revealed for o in second.solid_walls)

    meter.tick(False, 0.1)
    assert not any(o.revealed for o in second.disguised_obstacles())


def test_broadcaster_without_maze_is_a_no_op():
    meter = PerceptionMeter(on_reveal=RevealBroadcaster(lambda: None))
    assert meter.tick(True, 0.5) == [True]
