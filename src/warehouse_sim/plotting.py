"""Plotting helpers for simulated inventory histories."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import matplotlib.pyplot as plt
import pandas as pd

from .io import records_to_dataframe
from .state import DayRecord

DEFAULT_WINDOW = 7

SERIES_LABELS = {
    "inventory": "Inventory",
    "demand": "Demand",
    "incoming_avg": "Incoming (avg pipeline)",
    "order_quantity": "Order quantity",
}


def moving_average(values: Iterable[float], window: int = DEFAULT_WINDOW) -> list[float]:
    """Trailing mean over the last ``window`` values; shorter windows at the start."""
    if window <= 0:
        raise ValueError("Moving average window must be positive.")
    series = pd.Series(list(values), dtype="float64")
    return series.rolling(window=window, min_periods=1).mean().tolist()


def plot_simulation(
    records: Sequence[DayRecord] | pd.DataFrame,
    *,
    window: int = DEFAULT_WINDOW,
    series: Iterable[str] | None = None,
    ax: plt.Axes | None = None,
    title: str | None = None,
) -> plt.Axes:
    """Plot moving averages of inventory, demand, pipeline and orders by day."""
    selected = list(SERIES_LABELS) if series is None else list(series)
    unknown = [name for name in selected if name not in SERIES_LABELS]
    if unknown:
        raise ValueError(
            "series must be chosen from: "
            f"{', '.join(SERIES_LABELS)}; got {', '.join(unknown)}."
        )

    if isinstance(records, pd.DataFrame):
        data = records.copy()
    else:
        data = records_to_dataframe(records, library="pandas")

    if ax is None:
        _, ax = plt.subplots(figsize=(10, 5))

    for name in selected:
        ax.plot(
            data["day"],
            moving_average(data[name], window),
            label=f"{SERIES_LABELS[name]} ({window}d avg)",
        )
    ax.set_xlabel("Day")
    ax.set_ylabel("Units")
    ax.set_title(title or "Inventory simulation")
    if selected:
        ax.legend(loc="upper right")
    ax.grid(True, alpha=0.3)
    return ax
