"""Replenishment policies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .config import SimulationConfig
from .state import DAYS_PER_WEEK, InventoryState, round_half_up


class OrderingPolicy(Protocol):
    def order_quantity_for(
        self, state: InventoryState, config: SimulationConfig
    ) -> int:
        ...


def _clamp_order(quantity: float, config: SimulationConfig) -> int:
    return round_half_up(max(0.0, min(quantity, float(config.max_capacity))))


@dataclass(frozen=True)
class WeeklyCoveragePolicy:
    """Order up to a number of days of yesterday's demand, counting the pipeline.

    Orders smaller than ``min_order_fraction`` of the base weekday demand are
    skipped so the fixed order cost is not paid for a trivial quantity.
    """

    coverage_days: int = DAYS_PER_WEEK
    min_order_fraction: float = 0.5

    def __post_init__(self) -> None:
        if self.coverage_days <= 0:
            raise ValueError("Coverage days must be positive.")
        if self.min_order_fraction < 0:
            raise ValueError("Minimum order fraction cannot be negative.")

    def order_quantity_for(
        self, state: InventoryState, config: SimulationConfig
    ) -> int:
        target_inventory = state.prev_demand * self.coverage_days
        order_qty = target_inventory - state.inventory_position
        if order_qty < config.base_weekday_demand * self.min_order_fraction:
            return 0
        return _clamp_order(order_qty, config)


@dataclass(frozen=True)
class ReorderPointPolicy:
    """Order a fixed quantity when the inventory position falls to a point."""

    reorder_point: int
    order_quantity: int

    def __post_init__(self) -> None:
        if self.order_quantity < 0:
            raise ValueError("Order quantity cannot be negative.")

    def order_quantity_for(
        self, state: InventoryState, config: SimulationConfig
    ) -> int:
        if state.inventory_position <= self.reorder_point:
            return _clamp_order(self.order_quantity, config)
        return 0


DEFAULT_POLICY = WeeklyCoveragePolicy()


def decide_order_quantity(state: InventoryState, config: SimulationConfig) -> int:
    return DEFAULT_POLICY.order_quantity_for(state, config)
