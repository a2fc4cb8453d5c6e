import json

import pytest

from warehouse_sim import (
    UNCERTAINTY_LEVELS,
    DemandPattern,
    SimulationConfig,
    config_from_mapping,
    load_config,
    normalize_demand_pattern,
    normalize_uncertainty_level,
)


def test_uncertainty_levels_table():
    assert {
        name: (profile.variance, profile.shock_probability)
        for name, profile in UNCERTAINTY_LEVELS.items()
    } == {
        "low": (0.10, 0.02),
        "medium": (0.25, 0.05),
        "high": (0.40, 0.10),
        "very-high": (0.60, 0.15),
    }


@pytest.mark.parametrize("alias", ["very-high", "very_high", " VeryHigh ", "very high"])
def test_normalize_uncertainty_level_aliases(alias):
    assert normalize_uncertainty_level(alias) == "very-high"


def test_normalize_uncertainty_level_rejects_unknown():
    with pytest.raises(ValueError, match="demand_uncertainty must be one of"):
        normalize_uncertainty_level("extreme")


def test_normalize_demand_pattern():
    assert normalize_demand_pattern(" Seasonal") is DemandPattern.SEASONAL
    assert normalize_demand_pattern(DemandPattern.VOLATILE) is DemandPattern.VOLATILE
    with pytest.raises(ValueError, match="demand_pattern must be one of"):
        normalize_demand_pattern("cyclic")


def test_config_accepts_pattern_names():
    config = SimulationConfig(demand_pattern="trending")
    assert config.demand_pattern is DemandPattern.TRENDING


def test_from_uncertainty():
    config = SimulationConfig.from_uncertainty("high", horizon_days=30)

    assert config.demand_variance == 0.40
    assert config.demand_shock_probability == 0.10
    assert config.horizon_days == 30


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"min_lead_time": 6, "max_lead_time": 5}, "Min lead time"),
        ({"min_lead_time": 0}, "min_lead_time"),
        ({"horizon_days": 0}, "horizon_days"),
        ({"max_capacity": 0}, "must be positive"),
        ({"max_demand": -1}, "must be positive"),
        ({"base_weekday_demand": 0}, "must be positive"),
        ({"holding_cost": -1.0}, "Cost values"),
        ({"fixed_order_cost": -0.5}, "Cost values"),
        ({"weekend_ratio": -0.1}, "Weekend ratio"),
        ({"demand_variance": -0.1}, "variance"),
        ({"demand_shock_probability": 1.5}, "shock probability"),
    ],
)
def test_invalid_configs_are_rejected(overrides, message):
    with pytest.raises(ValueError, match=message):
        SimulationConfig(**overrides)


def test_config_from_mapping_accepts_form_keys():
    config = config_from_mapping(
        {
            "minLeadTime": "1",
            "maxLeadTime": "3",
            "MAX_CAPACITY": 800,
            "MAX_DEMAND": "400",
            "HOLDING_COST": "0.5",
            "STOCKOUT_COST": 4,
            "PURCHASE_COST": "1.5",
            "FIXED_ORDER_COST": "25",
            "baseWeekdayDemand": "80",
            "weekendRatio": "0.6",
            "demandUncertainty": "low",
            "demandPattern": "volatile",
            "horizonDays": "90",
        }
    )

    assert config.min_lead_time == 1
    assert config.max_lead_time == 3
    assert config.max_capacity == 800
    assert config.max_demand == 400
    assert config.holding_cost == 0.5
    assert config.fixed_order_cost == 25.0
    assert config.base_weekday_demand == 80
    assert config.weekend_ratio == 0.6
    assert config.demand_variance == 0.10
    assert config.demand_shock_probability == 0.02
    assert config.demand_pattern is DemandPattern.VOLATILE
    assert config.horizon_days == 90


def test_explicit_variance_wins_over_uncertainty_level():
    config = config_from_mapping({"demand_uncertainty": "high", "demand_variance": 0.0})

    assert config.demand_variance == 0.0
    assert config.demand_shock_probability == 0.10


def test_config_from_mapping_warns_on_unknown_keys():
    with pytest.warns(UserWarning, match="unknown config key"):
        config = config_from_mapping({"horizon_days": 10, "colour": "blue"})
    assert config.horizon_days == 10


def test_config_from_mapping_rejects_fractional_integers():
    with pytest.raises(ValueError, match="max_capacity must be an integer"):
        config_from_mapping({"max_capacity": "10.5"})


def test_load_config_from_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"horizon_days": 14, "demand_pattern": "seasonal"}))

    config = load_config(path)

    assert config.horizon_days == 14
    assert config.demand_pattern is DemandPattern.SEASONAL
    assert config.max_lead_time == 5


def test_load_config_requires_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")

    with pytest.raises(ValueError, match="JSON object"):
        load_config(path)
