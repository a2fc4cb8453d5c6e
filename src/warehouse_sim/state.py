"""State and history record types shared by the engine components."""

from __future__ import annotations

from dataclasses import dataclass
import math

from .config import SimulationConfig

DAYS_PER_WEEK = 7
WEEKEND_START = 5
INITIAL_COVERAGE_DAYS = 5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties going up (0.5 -> 1, -0.5 -> 0)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class InventoryState:
    day_of_week: int
    step: int
    inventory: int
    prev_demand: int
    pipeline: tuple[int, ...]
    volatile_multiplier: float = 1.0

    @property
    def on_order(self) -> int:
        return sum(self.pipeline)

    @property
    def inventory_position(self) -> int:
        return self.inventory + self.on_order

    @property
    def is_weekend(self) -> bool:
        return self.day_of_week >= WEEKEND_START


@dataclass(frozen=True)
class DayRecord:
    day: int
    inventory: int
    demand: int
    incoming_avg: float
    order_quantity: int
    stockout: int
    reward: float
    total_cost: float


def initialize_state(config: SimulationConfig) -> InventoryState:
    """Start on a Monday with about five days of stock and an empty pipeline."""
    return InventoryState(
        day_of_week=0,
        step=0,
        inventory=min(
            config.base_weekday_demand * INITIAL_COVERAGE_DAYS, config.max_capacity
        ),
        prev_demand=config.base_weekday_demand,
        pipeline=tuple(0 for _ in range(config.max_lead_time)),
        volatile_multiplier=1.0,
    )
