"""Environment step function and simulation driver."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import logging
import random

from .config import SimulationConfig
from .demand import generate_demand
from .kpis import KpiSummary, compute_kpis
from .policies import DEFAULT_POLICY, OrderingPolicy
from .state import DAYS_PER_WEEK, DayRecord, InventoryState, initialize_state

logger = logging.getLogger(__name__)

REWARD_SCALE = 100000.0


@dataclass(frozen=True)
class StepOutcome:
    state: InventoryState
    record: DayRecord


@dataclass(frozen=True)
class SimulationResult:
    records: Sequence[DayRecord]
    summary: KpiSummary


def step_environment(
    state: InventoryState,
    order_quantity: int,
    config: SimulationConfig,
    rng: random.Random,
) -> StepOutcome:
    """Advance one day and return the new state with the day's record.

    Today's delivery is received and the pipeline shifted before the new
    order is scheduled and demand is drawn. ``state`` is left untouched.
    """
    inventory = state.inventory + state.pipeline[0]
    pipeline = list(state.pipeline[1:]) + [0]

    lead_time = rng.randint(config.min_lead_time, config.max_lead_time)
    if order_quantity > 0:
        pipeline[lead_time - 1] += order_quantity

    draw = generate_demand(
        InventoryState(
            day_of_week=state.day_of_week,
            step=state.step,
            inventory=inventory,
            prev_demand=state.prev_demand,
            pipeline=tuple(pipeline),
            volatile_multiplier=state.volatile_multiplier,
        ),
        config,
        rng,
    )
    demand = draw.quantity

    stockout = max(0, demand - inventory)
    inventory = max(0, inventory - demand)
    inventory = min(inventory, config.max_capacity)

    holding_cost = inventory * config.holding_cost
    stockout_penalty = stockout * config.stockout_cost
    variable_order_cost = order_quantity * config.purchase_cost
    fixed_order_cost = config.fixed_order_cost if order_quantity > 0 else 0.0
    total_cost = holding_cost + stockout_penalty + variable_order_cost + fixed_order_cost

    next_state = InventoryState(
        day_of_week=(state.day_of_week + 1) % DAYS_PER_WEEK,
        step=state.step + 1,
        inventory=inventory,
        prev_demand=demand,
        pipeline=tuple(pipeline),
        volatile_multiplier=draw.volatile_multiplier,
    )
    record = DayRecord(
        day=next_state.step,
        inventory=inventory,
        demand=demand,
        incoming_avg=sum(pipeline) / len(pipeline),
        order_quantity=order_quantity,
        stockout=stockout,
        reward=-total_cost / REWARD_SCALE,
        total_cost=total_cost,
    )
    return StepOutcome(state=next_state, record=record)


def run_simulation(
    config: SimulationConfig,
    *,
    initial_state: InventoryState | None = None,
    policy: OrderingPolicy | None = None,
    rng: random.Random | None = None,
    seed: int | None = None,
) -> list[DayRecord]:
    """Simulate ``config.horizon_days`` days and return one record per day.

    Pass ``rng`` to share a random source, or ``seed`` to get a reproducible
    run; neither means fresh system randomness.
    """
    if rng is None:
        rng = random.Random(seed)
    if policy is None:
        policy = DEFAULT_POLICY
    state = initial_state if initial_state is not None else initialize_state(config)

    logger.debug(
        "Simulating %d days (pattern=%s, lead time %d-%d).",
        config.horizon_days,
        config.demand_pattern.value,
        config.min_lead_time,
        config.max_lead_time,
    )
    records: list[DayRecord] = []
    for _ in range(config.horizon_days):
        order_qty = policy.order_quantity_for(state, config)
        outcome = step_environment(state, order_qty, config, rng)
        records.append(outcome.record)
        state = outcome.state
    logger.debug("Finished simulation with inventory %d.", state.inventory)
    return records


def simulate(
    config: SimulationConfig,
    *,
    initial_state: InventoryState | None = None,
    policy: OrderingPolicy | None = None,
    rng: random.Random | None = None,
    seed: int | None = None,
) -> SimulationResult:
    records = run_simulation(
        config, initial_state=initial_state, policy=policy, rng=rng, seed=seed
    )
    return SimulationResult(records=records, summary=compute_kpis(records))


def simulate_scenarios(
    scenarios: Mapping[str, SimulationConfig],
    *,
    seed: int | None = None,
    policy: OrderingPolicy | None = None,
) -> dict[str, SimulationResult]:
    """Run each named config independently.

    Every scenario gets its own random source seeded with ``seed``, so
    scenarios are compared on the same random stream.
    """
    results: dict[str, SimulationResult] = {}
    for name, config in scenarios.items():
        results[name] = simulate(config, policy=policy, rng=random.Random(seed))
    return results


def run_monte_carlo(
    config: SimulationConfig,
    runs: int,
    *,
    base_seed: int | None = None,
    policy: OrderingPolicy | None = None,
) -> list[KpiSummary]:
    """Replicate a run ``runs`` times; replication ``i`` uses ``base_seed + i``."""
    if runs <= 0:
        raise ValueError("Runs must be positive.")
    summaries: list[KpiSummary] = []
    for index in range(runs):
        seed = None if base_seed is None else base_seed + index
        summaries.append(simulate(config, policy=policy, seed=seed).summary)
    return summaries
