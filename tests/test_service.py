# tests/test_service.py
# ------------------------------------------------------------
# Design service facade, environment configuration and templates.
#
from __future__ import annotations

from dataclasses import replace

import pytest

from causeway.config import CausewayConfig, CostRates
from causeway.errors import InvalidRegionError, UnknownCategoryError, UnknownSoilTypeError
from causeway.models import CategoryPolicy
from causeway.service import DesignService
from causeway.templates import TEMPLATES, get_template, template_names

_ENV_VARS = (
    "CAUSEWAY_SOIL_POLICY",
    "CAUSEWAY_REGION_POLICY",
    "CAUSEWAY_DEFAULT_REGION",
    "CAUSEWAY_CHANNEL_WIDTH",
    "CAUSEWAY_CURRENCY",
    "CAUSEWAY_RATE_CONCRETE",
    "CAUSEWAY_RATE_STEEL",
    "CAUSEWAY_RATE_FORMWORK",
    "CAUSEWAY_RATE_EXCAVATION",
    "CAUSEWAY_LABOR_FRACTION",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Unset every CAUSEWAY_* variable; anything set during the test is undone."""
    for name in _ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


# -----------------------------
# Configuration
# -----------------------------
def test_config_defaults(clean_env):
    config = CausewayConfig.from_env()
    assert config.soil_policy == CategoryPolicy.LENIENT
    assert config.region_policy == CategoryPolicy.STRICT
    assert config.default_region == "standard"
    assert config.channel_width is None
    assert config.cost_rates == CostRates()


def test_config_from_env(clean_env):
    clean_env.setenv("CAUSEWAY_SOIL_POLICY", "strict")
    clean_env.setenv("CAUSEWAY_REGION_POLICY", "Lenient")
    clean_env.setenv("CAUSEWAY_DEFAULT_REGION", "rural")
    clean_env.setenv("CAUSEWAY_CHANNEL_WIDTH", "150")
    clean_env.setenv("CAUSEWAY_RATE_STEEL", "70000")
    clean_env.setenv("CAUSEWAY_CURRENCY", "USD")

    config = CausewayConfig.from_env()
    assert config.soil_policy == CategoryPolicy.STRICT
    assert config.region_policy == CategoryPolicy.LENIENT
    assert config.default_region == "rural"
    assert config.channel_width == 150.0
    assert config.cost_rates.steel == 70000.0
    assert config.cost_rates.currency == "USD"


def test_config_from_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("CAUSEWAY_DEFAULT_REGION=urban\n", encoding="utf-8")
    assert CausewayConfig.from_env(str(env_file)).default_region == "urban"


def test_config_missing_env_file(clean_env, tmp_path):
    with pytest.raises(FileNotFoundError):
        CausewayConfig.from_env(str(tmp_path / "missing.env"))


@pytest.mark.parametrize(
    "name, value",
    [
        ("CAUSEWAY_SOIL_POLICY", "sometimes"),
        ("CAUSEWAY_RATE_CONCRETE", "cheap"),
        ("CAUSEWAY_DEFAULT_REGION", "moon"),
        ("CAUSEWAY_CHANNEL_WIDTH", "-5"),
        ("CAUSEWAY_CHANNEL_WIDTH", "wide"),
        ("CAUSEWAY_CHANNEL_WIDTH", "nan"),
        ("CAUSEWAY_RATE_STEEL", "inf"),
    ],
)
def test_config_rejects_bad_values(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(ValueError):
        CausewayConfig.from_env()


def test_bad_channel_width_names_variable(clean_env):
    clean_env.setenv("CAUSEWAY_CHANNEL_WIDTH", "wide")
    with pytest.raises(ValueError, match="CAUSEWAY_CHANNEL_WIDTH"):
        CausewayConfig.from_env()


@pytest.mark.parametrize(
    "overrides",
    [
        {"concrete": float("nan")},
        {"labor_fraction": float("nan")},
        {"region_multipliers": {"standard": float("inf")}},
    ],
)
def test_rates_must_be_finite(overrides):
    with pytest.raises(ValueError):
        CostRates(**overrides)


def test_channel_width_must_be_finite():
    with pytest.raises(ValueError):
        CausewayConfig(channel_width=float("nan"))


# -----------------------------
# Service
# -----------------------------
def test_service_uses_config(road_input):
    service = DesignService(
        config=CausewayConfig(
            soil_policy=CategoryPolicy.STRICT,
            default_region="urban",
            channel_width=200.0,
        )
    )
    res = service.calculate(road_input)
    assert service.estimate_cost(res.materials).region == "urban"
    assert service.assess_environment(res).water.channel_width == 200.0
    with pytest.raises(UnknownSoilTypeError):
        service.calculate(replace(road_input, soil_type="peat"))
    with pytest.raises(InvalidRegionError):
        service.estimate_cost(res.materials, "metro")


def test_service_sessions_and_compare(road_input):
    service = DesignService()
    res_a = service.calculate(road_input)
    b_input = replace(road_input, width=6.0)
    res_b = service.calculate(b_input)

    a = service.save_session("A", road_input, res_a)
    b = service.save_session("B", b_input, res_b)
    assert [s.id for s in service.list_sessions()] == [a, b]

    by_id = service.compare(a, b)
    direct = service.compare_results(res_a, res_b)
    assert by_id.cost_diff_pct == pytest.approx(direct.cost_diff_pct)
    assert by_id.region == "standard"

    service.delete_session(a)
    assert len(service.list_sessions()) == 1
    assert service.load_session(b).name == "B"


def test_region_choices_start_with_default_region():
    """The UI preselects the first choice, so the configured default leads."""
    assert DesignService().region_choices() == ["standard", "urban", "rural"]
    service = DesignService(config=CausewayConfig(default_region="rural"))
    assert service.region_choices() == ["rural", "standard", "urban"]


# -----------------------------
# Templates
# -----------------------------
def test_templates_listed():
    assert len(TEMPLATES) == 6
    assert "Railway Crossing" in template_names()


def test_template_lookup_is_case_insensitive():
    t = get_template("standard road causeway")
    assert t.inputs.length == 100
    assert t.inputs.width == 8


def test_unknown_template():
    with pytest.raises(UnknownCategoryError):
        get_template("Space Elevator")


@pytest.mark.parametrize("name", template_names())
def test_every_template_calculates(name):
    service = DesignService()
    res = service.calculate(get_template(name).inputs)
    assert res.safety_margin > 0
    assert service.score(res).overall > 0
