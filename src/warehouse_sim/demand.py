"""Stochastic daily demand generation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import math
import random

from .config import DemandPattern, SimulationConfig
from .state import InventoryState, round_half_up

SEASONAL_AMPLITUDE = 0.3
SEASONAL_PERIOD_DAYS = 60
TREND_GROWTH = 0.4
VOLATILE_STEP = 0.15
VOLATILE_FLOOR = 0.5
VOLATILE_CEILING = 1.5
SHOCK_MIN_MAGNITUDE = 1.5
SHOCK_MAX_MAGNITUDE = 2.5
SHOCK_DROP_PROBABILITY = 0.3
SHOCK_DROP_SCALE = -0.5


@dataclass(frozen=True)
class PatternDraw:
    factor: float
    volatile_multiplier: float


@dataclass(frozen=True)
class DemandDraw:
    quantity: int
    volatile_multiplier: float


PatternHandler = Callable[[InventoryState, SimulationConfig, random.Random], PatternDraw]


def _stable(
    state: InventoryState, config: SimulationConfig, rng: random.Random
) -> PatternDraw:
    return PatternDraw(1.0, state.volatile_multiplier)


def _seasonal(
    state: InventoryState, config: SimulationConfig, rng: random.Random
) -> PatternDraw:
    factor = 1.0 + SEASONAL_AMPLITUDE * math.sin(
        2 * math.pi * state.step / SEASONAL_PERIOD_DAYS
    )
    return PatternDraw(factor, state.volatile_multiplier)


def _trending(
    state: InventoryState, config: SimulationConfig, rng: random.Random
) -> PatternDraw:
    progress = state.step / config.horizon_days
    return PatternDraw(1.0 + TREND_GROWTH * progress, state.volatile_multiplier)


def _volatile(
    state: InventoryState, config: SimulationConfig, rng: random.Random
) -> PatternDraw:
    change = rng.uniform(-VOLATILE_STEP, VOLATILE_STEP)
    multiplier = max(
        VOLATILE_FLOOR, min(VOLATILE_CEILING, state.volatile_multiplier + change)
    )
    return PatternDraw(multiplier, multiplier)


_PATTERN_HANDLERS: dict[DemandPattern, PatternHandler] = {
    DemandPattern.STABLE: _stable,
    DemandPattern.SEASONAL: _seasonal,
    DemandPattern.TRENDING: _trending,
    DemandPattern.VOLATILE: _volatile,
}

_missing = set(DemandPattern) - set(_PATTERN_HANDLERS)
if _missing:
    raise RuntimeError(f"No demand handler for patterns: {sorted(_missing)}.")


def day_of_week_factor(state: InventoryState, config: SimulationConfig) -> float:
    return config.weekend_ratio if state.is_weekend else 1.0


def pattern_factor(
    state: InventoryState, config: SimulationConfig, rng: random.Random
) -> PatternDraw:
    """Return the pattern multiplier and the volatility accumulator after the draw.

    Only the volatile pattern consumes randomness or moves the accumulator.
    """
    return _PATTERN_HANDLERS[config.demand_pattern](state, config, rng)


def generate_demand(
    state: InventoryState, config: SimulationConfig, rng: random.Random
) -> DemandDraw:
    """Draw one day's demand.

    The weekday/weekend factor and the pattern factor scale the base demand,
    normal noise proportional to that base is added, and with
    ``demand_shock_probability`` a shock multiplies the result: a spike of
    1.5-2.5x, or (30% of shocks) the same magnitude scaled by -0.5, which
    drives the day's demand to zero after clamping. The result is clamped to
    ``[0, max_demand]`` and rounded.
    """
    pattern = pattern_factor(state, config, rng)
    base_demand = (
        config.base_weekday_demand
        * day_of_week_factor(state, config)
        * pattern.factor
    )

    std_dev = base_demand * config.demand_variance
    demand = base_demand + rng.gauss(0.0, std_dev)

    if rng.random() < config.demand_shock_probability:
        is_spike = rng.random() > SHOCK_DROP_PROBABILITY
        magnitude = rng.uniform(SHOCK_MIN_MAGNITUDE, SHOCK_MAX_MAGNITUDE)
        demand *= magnitude if is_spike else magnitude * SHOCK_DROP_SCALE

    demand = max(0.0, min(demand, float(config.max_demand)))
    return DemandDraw(
        quantity=round_half_up(demand),
        volatile_multiplier=pattern.volatile_multiplier,
    )
