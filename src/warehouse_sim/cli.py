"""Command-line runner for the warehouse simulation."""

from __future__ import annotations

import argparse
from dataclasses import asdict, replace
import logging
from pathlib import Path
import sys

from .config import (
    UNCERTAINTY_LEVELS,
    DemandPattern,
    SimulationConfig,
    load_config,
    normalize_uncertainty_level,
)
from .io import daily_table, kpi_summaries_to_dataframe, write_records_to_csv
from .kpis import fill_rate
from .simulation import run_monte_carlo, simulate

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Single-item inventory simulation")
    parser.add_argument("config", type=Path, nargs="?", help="Path to JSON config file")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--days", type=int, default=None, help="Horizon in days")
    parser.add_argument(
        "--pattern",
        choices=[member.value for member in DemandPattern],
        default=None,
        help="Demand pattern",
    )
    parser.add_argument(
        "--uncertainty",
        choices=sorted(UNCERTAINTY_LEVELS),
        default=None,
        help="Demand uncertainty level",
    )
    parser.add_argument(
        "--monte-carlo", type=int, default=0, help="Number of Monte Carlo runs"
    )
    parser.add_argument("--output", type=Path, default=None, help="CSV path for daily records")
    parser.add_argument("--table", action="store_true", help="Print the first 30 days")
    parser.add_argument("--plot", type=Path, default=None, help="PNG path for the chart")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _resolve_config(args: argparse.Namespace) -> SimulationConfig:
    config = load_config(args.config) if args.config else SimulationConfig()
    overrides: dict[str, object] = {}
    if args.days is not None:
        overrides["horizon_days"] = args.days
    if args.pattern is not None:
        overrides["demand_pattern"] = DemandPattern(args.pattern)
    if args.uncertainty is not None:
        profile = UNCERTAINTY_LEVELS[normalize_uncertainty_level(args.uncertainty)]
        overrides["demand_variance"] = profile.variance
        overrides["demand_shock_probability"] = profile.shock_probability
    return replace(config, **overrides) if overrides else config


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _resolve_config(args)
    except (OSError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    if args.monte_carlo and args.monte_carlo > 1:
        summaries = run_monte_carlo(config, args.monte_carlo, base_seed=args.seed)
        frame = kpi_summaries_to_dataframe(summaries).drop(columns="run")
        print("Monte Carlo KPIs:")
        print(frame.describe().loc[["mean", "std", "min", "max"]].round(2).to_string())
        return 0

    result = simulate(config, seed=args.seed)
    print("KPIs:")
    for name, value in asdict(result.summary).items():
        print(f"  {name}: {value}")
    print(f"  fill_rate: {fill_rate(result.records):.3f}")

    if args.table:
        rows = daily_table(result.records)
        if rows:
            print(" ".join(f"{key:>14}" for key in rows[0]))
            for row in rows:
                print(" ".join(f"{value:>14}" for value in row.values()))

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        write_records_to_csv(result.records, args.output)
        logger.info("Saved daily records to %s", args.output)

    if args.plot is not None:
        import matplotlib

        matplotlib.use("Agg")
        from .plotting import plot_simulation

        ax = plot_simulation(result.records)
        args.plot.parent.mkdir(parents=True, exist_ok=True)
        ax.figure.savefig(args.plot)
        logger.info("Saved chart to %s", args.plot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
