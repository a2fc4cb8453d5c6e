"""Simulation configuration, uncertainty levels and demand patterns."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
import json
from pathlib import Path
import warnings


class DemandPattern(str, Enum):
    STABLE = "stable"
    SEASONAL = "seasonal"
    TRENDING = "trending"
    VOLATILE = "volatile"


@dataclass(frozen=True)
class UncertaintyProfile:
    variance: float
    shock_probability: float


UNCERTAINTY_LOW = "low"
UNCERTAINTY_MEDIUM = "medium"
UNCERTAINTY_HIGH = "high"
UNCERTAINTY_VERY_HIGH = "very-high"

UNCERTAINTY_LEVELS: dict[str, UncertaintyProfile] = {
    UNCERTAINTY_LOW: UncertaintyProfile(variance=0.10, shock_probability=0.02),
    UNCERTAINTY_MEDIUM: UncertaintyProfile(variance=0.25, shock_probability=0.05),
    UNCERTAINTY_HIGH: UncertaintyProfile(variance=0.40, shock_probability=0.10),
    UNCERTAINTY_VERY_HIGH: UncertaintyProfile(variance=0.60, shock_probability=0.15),
}

_LEVEL_ALIASES = {
    UNCERTAINTY_LOW: UNCERTAINTY_LOW,
    UNCERTAINTY_MEDIUM: UNCERTAINTY_MEDIUM,
    "med": UNCERTAINTY_MEDIUM,
    UNCERTAINTY_HIGH: UNCERTAINTY_HIGH,
    UNCERTAINTY_VERY_HIGH: UNCERTAINTY_VERY_HIGH,
    "very_high": UNCERTAINTY_VERY_HIGH,
    "veryhigh": UNCERTAINTY_VERY_HIGH,
    "very high": UNCERTAINTY_VERY_HIGH,
}


def normalize_uncertainty_level(level: str) -> str:
    normalized = level.strip().lower()
    if normalized in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[normalized]
    raise ValueError(
        "demand_uncertainty must be one of: "
        f"{', '.join(sorted(UNCERTAINTY_LEVELS))}."
    )


def normalize_demand_pattern(pattern: str | DemandPattern) -> DemandPattern:
    if isinstance(pattern, DemandPattern):
        return pattern
    try:
        return DemandPattern(str(pattern).strip().lower())
    except ValueError:
        raise ValueError(
            "demand_pattern must be one of: "
            f"{', '.join(member.value for member in DemandPattern)}."
        ) from None


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of a single simulation run.

    Instances are validated on construction and never change during a run.
    """

    min_lead_time: int = 2
    max_lead_time: int = 5
    max_capacity: int = 1000
    max_demand: int = 500
    holding_cost: float = 1.0
    stockout_cost: float = 5.0
    purchase_cost: float = 2.0
    fixed_order_cost: float = 50.0
    base_weekday_demand: int = 100
    weekend_ratio: float = 0.5
    demand_variance: float = UNCERTAINTY_LEVELS[UNCERTAINTY_MEDIUM].variance
    demand_shock_probability: float = UNCERTAINTY_LEVELS[
        UNCERTAINTY_MEDIUM
    ].shock_probability
    demand_pattern: DemandPattern = DemandPattern.STABLE
    horizon_days: int = 365

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "demand_pattern", normalize_demand_pattern(self.demand_pattern)
        )
        validate_config(self)

    @classmethod
    def from_uncertainty(cls, level: str, **kwargs) -> "SimulationConfig":
        """Build a config whose variance and shock probability come from a named level."""
        profile = UNCERTAINTY_LEVELS[normalize_uncertainty_level(level)]
        return cls(
            demand_variance=profile.variance,
            demand_shock_probability=profile.shock_probability,
            **kwargs,
        )


def validate_config(config: SimulationConfig) -> None:
    for name in ("min_lead_time", "max_lead_time", "horizon_days"):
        value = getattr(config, name)
        if not isinstance(value, int) or value <= 0:
            raise ValueError(f"{name} must be a positive integer.")
    if config.min_lead_time > config.max_lead_time:
        raise ValueError("Min lead time cannot be greater than max lead time.")
    if (
        config.max_capacity <= 0
        or config.max_demand <= 0
        or config.base_weekday_demand <= 0
    ):
        raise ValueError("Capacity and demand values must be positive.")
    if (
        config.holding_cost < 0
        or config.stockout_cost < 0
        or config.purchase_cost < 0
        or config.fixed_order_cost < 0
    ):
        raise ValueError("Cost values cannot be negative.")
    if config.weekend_ratio < 0:
        raise ValueError("Weekend ratio cannot be negative.")
    if config.demand_variance < 0:
        raise ValueError("Demand variance cannot be negative.")
    if not 0.0 <= config.demand_shock_probability <= 1.0:
        raise ValueError("Demand shock probability must be between 0 and 1.")
    if not isinstance(config.demand_pattern, DemandPattern):
        raise ValueError("demand_pattern must be a DemandPattern.")


_KEY_ALIASES = {
    "minLeadTime": "min_lead_time",
    "maxLeadTime": "max_lead_time",
    "MAX_CAPACITY": "max_capacity",
    "maxCapacity": "max_capacity",
    "MAX_DEMAND": "max_demand",
    "maxDemand": "max_demand",
    "HOLDING_COST": "holding_cost",
    "holdingCost": "holding_cost",
    "STOCKOUT_COST": "stockout_cost",
    "stockoutCost": "stockout_cost",
    "PURCHASE_COST": "purchase_cost",
    "purchaseCost": "purchase_cost",
    "FIXED_ORDER_COST": "fixed_order_cost",
    "fixedOrderCost": "fixed_order_cost",
    "baseWeekdayDemand": "base_weekday_demand",
    "weekendRatio": "weekend_ratio",
    "demandVariance": "demand_variance",
    "demandShockProb": "demand_shock_probability",
    "demand_shock_prob": "demand_shock_probability",
    "demandPattern": "demand_pattern",
    "horizonDays": "horizon_days",
    "demandUncertainty": "demand_uncertainty",
}

_INT_FIELDS = {
    "min_lead_time",
    "max_lead_time",
    "max_capacity",
    "max_demand",
    "base_weekday_demand",
    "horizon_days",
}


def config_from_mapping(values: Mapping[str, object]) -> SimulationConfig:
    """Build a config from loosely typed input such as parsed JSON or form values.

    ``demand_uncertainty`` names one of ``UNCERTAINTY_LEVELS`` and supplies the
    variance and shock probability unless those are given explicitly.
    """
    known = {item.name for item in fields(SimulationConfig)}
    kwargs: dict[str, object] = {}
    level: str | None = None
    for raw_key, value in values.items():
        key = _KEY_ALIASES.get(raw_key, raw_key)
        if key == "demand_uncertainty":
            level = normalize_uncertainty_level(str(value))
            continue
        if key not in known:
            warnings.warn(f"Ignoring unknown config key {raw_key!r}.", stacklevel=2)
            continue
        if value is None:
            continue
        if key in _INT_FIELDS:
            kwargs[key] = _parse_int(value, field=key)
        elif key == "demand_pattern":
            kwargs[key] = normalize_demand_pattern(str(value))
        else:
            kwargs[key] = _parse_float(value, field=key)

    if level is not None:
        profile = UNCERTAINTY_LEVELS[level]
        kwargs.setdefault("demand_variance", profile.variance)
        kwargs.setdefault("demand_shock_probability", profile.shock_probability)
    return SimulationConfig(**kwargs)


def load_config(path: str | Path) -> SimulationConfig:
    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a JSON object.")
    return config_from_mapping(data)


def _parse_int(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        raise ValueError(f"{field} must be an integer.") from None
    if not number.is_integer():
        raise ValueError(f"{field} must be an integer.")
    return int(number)


def _parse_float(value: object, *, field: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number.")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be a number.") from None
