"""Single-item warehouse inventory simulation."""

from importlib.metadata import PackageNotFoundError, version as _dist_version

try:
    __version__ = _dist_version("warehouse-sim")
except PackageNotFoundError:
    __version__ = "0.0.0"

from .config import (
    UNCERTAINTY_LEVELS,
    DemandPattern,
    SimulationConfig,
    UncertaintyProfile,
    config_from_mapping,
    load_config,
    normalize_demand_pattern,
    normalize_uncertainty_level,
    validate_config,
)
from .demand import DemandDraw, day_of_week_factor, generate_demand, pattern_factor
from .io import (
    daily_table,
    iter_records_from_csv,
    kpi_summaries_to_dataframe,
    kpi_summaries_to_dicts,
    records_to_dataframe,
    records_to_dicts,
    write_records_to_csv,
)
from .kpis import KpiSummary, compute_kpis, fill_rate
from .policies import (
    OrderingPolicy,
    ReorderPointPolicy,
    WeeklyCoveragePolicy,
    decide_order_quantity,
)
from .simulation import (
    SimulationResult,
    StepOutcome,
    run_monte_carlo,
    run_simulation,
    simulate,
    simulate_scenarios,
    step_environment,
)
from .state import DayRecord, InventoryState, initialize_state, round_half_up

try:
    from .plotting import moving_average, plot_simulation
    _HAS_PLOTTING = True
except ModuleNotFoundError:
    moving_average = None
    plot_simulation = None
    _HAS_PLOTTING = False

__all__ = [
    "__version__",
    "UNCERTAINTY_LEVELS",
    "DemandPattern",
    "SimulationConfig",
    "UncertaintyProfile",
    "config_from_mapping",
    "load_config",
    "normalize_demand_pattern",
    "normalize_uncertainty_level",
    "validate_config",
    "DemandDraw",
    "day_of_week_factor",
    "generate_demand",
    "pattern_factor",
    "daily_table",
    "iter_records_from_csv",
    "kpi_summaries_to_dataframe",
    "kpi_summaries_to_dicts",
    "records_to_dataframe",
    "records_to_dicts",
    "write_records_to_csv",
    "KpiSummary",
    "compute_kpis",
    "fill_rate",
    "OrderingPolicy",
    "ReorderPointPolicy",
    "WeeklyCoveragePolicy",
    "decide_order_quantity",
    "SimulationResult",
    "StepOutcome",
    "run_monte_carlo",
    "run_simulation",
    "simulate",
    "simulate_scenarios",
    "step_environment",
    "DayRecord",
    "InventoryState",
    "initialize_state",
    "round_half_up",
]

if _HAS_PLOTTING:
    __all__.extend(["moving_average", "plot_simulation"])
