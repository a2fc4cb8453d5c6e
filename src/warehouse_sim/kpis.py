"""Summary metrics over a simulated history."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .state import DayRecord, round_half_up


@dataclass(frozen=True)
class KpiSummary:
    average_inventory: int
    average_demand: int
    total_stockout: int
    total_cost: int


def compute_kpis(records: Sequence[DayRecord]) -> KpiSummary:
    count = len(records)
    if count == 0:
        return KpiSummary(
            average_inventory=0, average_demand=0, total_stockout=0, total_cost=0
        )
    return KpiSummary(
        average_inventory=round_half_up(
            sum(record.inventory for record in records) / count
        ),
        average_demand=round_half_up(sum(record.demand for record in records) / count),
        total_stockout=round_half_up(sum(record.stockout for record in records)),
        total_cost=round_half_up(sum(record.total_cost for record in records)),
    )


def fill_rate(records: Sequence[DayRecord]) -> float:
    """Share of demand served from stock; 1.0 when there was no demand."""
    total_demand = sum(record.demand for record in records)
    if not total_demand:
        return 1.0
    total_stockout = sum(record.stockout for record in records)
    return 1.0 - total_stockout / total_demand
