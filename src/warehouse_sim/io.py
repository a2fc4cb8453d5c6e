"""Conversions of simulation output into dicts, dataframes, CSV and tables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import csv
from dataclasses import asdict, fields
from pathlib import Path
import warnings

from .kpis import KpiSummary
from .state import DayRecord, round_half_up

RECORD_FIELDS = [item.name for item in fields(DayRecord)]
DEFAULT_TABLE_DAYS = 30

_INT_RECORD_FIELDS = {"day", "inventory", "demand", "order_quantity", "stockout"}


def records_to_dicts(records: Iterable[DayRecord]) -> list[dict[str, object]]:
    return [asdict(record) for record in records]


def kpi_summaries_to_dicts(
    summaries: Iterable[KpiSummary],
) -> list[dict[str, object]]:
    return [
        {"run": index, **asdict(summary)}
        for index, summary in enumerate(summaries)
    ]


def _to_dataframe(
    data: list[dict[str, object]],
    *,
    columns: list[str],
    library: str,
    caller: str,
):
    if library == "pandas":
        try:
            import pandas as pd  # type: ignore
        except ModuleNotFoundError as exc:
            raise ModuleNotFoundError(
                f"pandas is required for {caller}(library='pandas')."
            ) from exc
        return pd.DataFrame(data, columns=columns)
    if library == "polars":
        try:
            import polars as pl  # type: ignore
        except ModuleNotFoundError as exc:
            raise ModuleNotFoundError(
                f"polars is required for {caller}(library='polars')."
            ) from exc
        return pl.DataFrame(data)
    raise ValueError("library must be 'pandas' or 'polars'.")


def records_to_dataframe(
    records: Iterable[DayRecord],
    *,
    library: str = "pandas",
):
    """Convert day records into a pandas or polars DataFrame."""
    return _to_dataframe(
        records_to_dicts(records),
        columns=RECORD_FIELDS,
        library=library,
        caller="records_to_dataframe",
    )


def kpi_summaries_to_dataframe(
    summaries: Iterable[KpiSummary],
    *,
    library: str = "pandas",
):
    """One row per Monte Carlo replication."""
    return _to_dataframe(
        kpi_summaries_to_dicts(summaries),
        columns=["run", *(item.name for item in fields(KpiSummary))],
        library=library,
        caller="kpi_summaries_to_dataframe",
    )


def write_records_to_csv(records: Iterable[DayRecord], path: str | Path) -> None:
    with open(path, "w", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=RECORD_FIELDS)
        writer.writeheader()
        for record in records:
            writer.writerow(asdict(record))


def iter_records_from_csv(path: str | Path) -> Iterator[DayRecord]:
    with open(path, newline="") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            warnings.warn(f"Missing header row in {path}.", stacklevel=2)
            return
        missing = [name for name in RECORD_FIELDS if name not in reader.fieldnames]
        if missing:
            raise ValueError(f"Missing required columns: {', '.join(missing)}.")
        for row in reader:
            values: dict[str, object] = {}
            for name in RECORD_FIELDS:
                raw = row[name]
                values[name] = (
                    int(float(raw)) if name in _INT_RECORD_FIELDS else float(raw)
                )
            yield DayRecord(**values)


def daily_table(
    records: Iterable[DayRecord],
    *,
    limit: int = DEFAULT_TABLE_DAYS,
) -> list[dict[str, object]]:
    """Rows for a per-day table view: the first ``limit`` days, rounded for display."""
    if limit <= 0:
        raise ValueError("Table limit must be positive.")
    rows: list[dict[str, object]] = []
    for record in records:
        if len(rows) >= limit:
            break
        rows.append(
            {
                "day": record.day,
                "inventory": round_half_up(record.inventory),
                "demand": round_half_up(record.demand),
                "incoming_avg": round_half_up(record.incoming_avg),
                "order_quantity": round_half_up(record.order_quantity),
                "stockout": round_half_up(record.stockout),
                "reward": round(record.reward, 2),
            }
        )
    return rows
