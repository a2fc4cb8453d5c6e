import math
import random

import pytest

from warehouse_sim import (
    DemandPattern,
    InventoryState,
    SimulationConfig,
    day_of_week_factor,
    generate_demand,
    pattern_factor,
)


def _config(**kwargs):
    values = {
        "base_weekday_demand": 100,
        "weekend_ratio": 0.5,
        "max_demand": 500,
        "demand_variance": 0.0,
        "demand_shock_probability": 0.0,
        "demand_pattern": "stable",
        "horizon_days": 100,
    }
    values.update(kwargs)
    return SimulationConfig(**values)


def _state(day_of_week=0, step=0, volatile_multiplier=1.0):
    return InventoryState(
        day_of_week=day_of_week,
        step=step,
        inventory=0,
        prev_demand=0,
        pipeline=(0, 0, 0, 0, 0),
        volatile_multiplier=volatile_multiplier,
    )


@pytest.mark.parametrize("day", [0, 1, 2, 3, 4])
def test_stable_weekday_demand_equals_base(day):
    draw = generate_demand(_state(day_of_week=day), _config(), random.Random(0))
    assert draw.quantity == 100


@pytest.mark.parametrize("day", [5, 6])
def test_stable_weekend_demand_uses_ratio(day):
    config = _config(base_weekday_demand=90, weekend_ratio=0.25)
    draw = generate_demand(_state(day_of_week=day), config, random.Random(0))
    # 22.5 rounds up
    assert draw.quantity == 23


def test_day_of_week_factor():
    config = _config(weekend_ratio=1.4)
    assert day_of_week_factor(_state(day_of_week=4), config) == 1.0
    assert day_of_week_factor(_state(day_of_week=5), config) == 1.4


def test_seasonal_pattern_follows_sixty_day_cycle():
    config = _config(demand_pattern="seasonal")
    rng = random.Random(0)

    assert generate_demand(_state(step=15), config, rng).quantity == 130
    assert generate_demand(_state(step=45), config, rng).quantity == 70
    assert generate_demand(_state(step=60), config, rng).quantity == 100
    assert pattern_factor(_state(step=10), config, rng).factor == pytest.approx(
        1.0 + 0.3 * math.sin(2 * math.pi * 10 / 60)
    )


def test_trending_pattern_ramps_over_horizon():
    config = _config(demand_pattern="trending", horizon_days=10)
    rng = random.Random(0)

    assert generate_demand(_state(step=0), config, rng).quantity == 100
    assert generate_demand(_state(step=5), config, rng).quantity == 120
    assert generate_demand(_state(step=10), config, rng).quantity == 140


def test_volatile_pattern_random_walk_stays_bounded():
    config = _config(demand_pattern="volatile")
    rng = random.Random(8)
    state = _state()
    seen = []
    for step in range(500):
        draw = generate_demand(state, config, rng)
        seen.append(draw.volatile_multiplier)
        assert abs(draw.quantity - 100 * draw.volatile_multiplier) <= 0.5
        state = _state(step=step + 1, volatile_multiplier=draw.volatile_multiplier)

    assert all(0.5 <= value <= 1.5 for value in seen)
    assert len(set(seen)) > 1
    steps = [abs(b - a) for a, b in zip([1.0] + seen, seen)]
    assert max(steps) <= 0.15 + 1e-12


def test_volatile_accumulator_clamps_at_bounds():
    config = _config(demand_pattern="volatile")
    rng = random.Random(1)

    high = pattern_factor(_state(volatile_multiplier=1.5), config, rng)
    low = pattern_factor(_state(volatile_multiplier=0.5), config, rng)

    assert 1.35 <= high.volatile_multiplier <= 1.5
    assert 0.5 <= low.volatile_multiplier <= 0.65
    assert high.factor == high.volatile_multiplier


@pytest.mark.parametrize(
    "pattern", [DemandPattern.STABLE, DemandPattern.SEASONAL, DemandPattern.TRENDING]
)
def test_non_volatile_patterns_keep_accumulator(pattern):
    config = _config(demand_pattern=pattern, demand_variance=0.3)
    draw = generate_demand(_state(step=7, volatile_multiplier=1.2), config, random.Random(4))
    assert draw.volatile_multiplier == 1.2


def test_noise_is_centered_on_base_demand():
    config = _config(demand_variance=0.25)
    rng = random.Random(12)
    draws = [generate_demand(_state(), config, rng).quantity for _ in range(4000)]

    mean = sum(draws) / len(draws)
    assert 95 <= mean <= 105
    assert min(draws) < 80
    assert max(draws) > 120


def test_shocks_spike_or_drop_to_zero():
    config = _config(demand_shock_probability=1.0)
    rng = random.Random(21)
    draws = [generate_demand(_state(), config, rng).quantity for _ in range(1000)]

    spikes = [value for value in draws if value > 0]
    drops = [value for value in draws if value == 0]
    assert all(150 <= value <= 250 for value in spikes)
    assert 0.6 <= len(spikes) / len(draws) <= 0.8
    assert len(drops) + len(spikes) == len(draws)


def test_demand_is_clamped_to_ceiling():
    config = _config(base_weekday_demand=400, max_demand=450, demand_shock_probability=1.0)
    rng = random.Random(3)
    draws = [generate_demand(_state(), config, rng).quantity for _ in range(200)]

    assert max(draws) == 450
    assert min(draws) >= 0


def test_same_seed_gives_same_demand_stream():
    config = _config(demand_pattern="volatile", demand_variance=0.6, demand_shock_probability=0.15)

    def stream(seed):
        rng = random.Random(seed)
        state = _state()
        values = []
        for step in range(50):
            draw = generate_demand(state, config, rng)
            values.append(draw.quantity)
            state = _state(day_of_week=(step + 1) % 7, step=step + 1,
                           volatile_multiplier=draw.volatile_multiplier)
        return values

    assert stream(5) == stream(5)
