# tests/test_structural.py
# ------------------------------------------------------------
# Structural calculator: reference values, validation, soil policy.
#
from __future__ import annotations

import math
from dataclasses import replace

import pytest

from causeway.config import CausewayConfig
from causeway.errors import InvalidInputError, UnknownSoilTypeError
from causeway.models import CategoryPolicy, ConstructionMethod, FoundationType
from causeway.structural import calculate, soil_bearing_capacity, validate_input


def test_reference_road_causeway(road_result):
    """100 x 8 x 2 m on medium soil, hand-checked."""
    s = road_result.structural
    assert s.volume == pytest.approx(1600.0)
    assert s.surface_area == pytest.approx(800.0)
    assert s.perimeter == pytest.approx(216.0)
    assert s.dead_load == pytest.approx(3840.0)
    assert s.live_load == pytest.approx(4000.0)
    assert s.total_load == pytest.approx(7840.0)
    assert s.foundation_area == pytest.approx(960.0)
    assert s.foundation_pressure == pytest.approx(8.1667, rel=1e-4)
    assert s.safety_margin == pytest.approx(18.367, rel=1e-4)

    m = s.materials
    assert m.concrete == pytest.approx(1600.0)
    assert m.steel == pytest.approx(128.0)
    assert m.formwork == pytest.approx(216.0 * 2.0 + 800.0)

    rec = road_result.recommendation
    assert rec.is_safe
    assert rec.foundation_type == FoundationType.SPREAD
    assert rec.construction_method == ConstructionMethod.DIRECT


def test_beam_idealisation(road_result):
    b = road_result.beam
    assert b.distributed_load == pytest.approx(9.8)
    assert b.bending_moment == pytest.approx(12250.0)
    assert b.deflection == pytest.approx(95.703, rel=1e-4)
    assert b.allowable_bending_moment == pytest.approx(60000.0)
    assert b.allowable_deflection == pytest.approx(0.4)
    assert not b.within_limits


def test_deep_water_needs_cofferdam(road_input):
    assert calculate(replace(road_input, water_depth=2.5)).recommendation.construction_method \
        == ConstructionMethod.COFFERDAM
    # threshold is strict
    assert calculate(replace(road_input, water_depth=2.0)).recommendation.construction_method \
        == ConstructionMethod.DIRECT


def test_unknown_soil_defaults_to_100_when_lenient(road_input):
    res = calculate(replace(road_input, soil_type="unknown_typo"))
    assert res.structural.soil_bearing_capacity == 100.0
    assert res.structural.safety_margin == pytest.approx(100.0 / (7840.0 / 960.0))


def test_unknown_soil_raises_when_strict(road_input):
    config = CausewayConfig(soil_policy=CategoryPolicy.STRICT)
    with pytest.raises(UnknownSoilTypeError) as exc:
        calculate(replace(road_input, soil_type="unknown_typo"), config)
    assert "unknown_typo" in str(exc.value)
    assert set(exc.value.allowed) == {"soft", "medium", "hard"}


def test_soil_lookup_is_case_insensitive():
    assert soil_bearing_capacity(" Hard ") == 300.0
    assert soil_bearing_capacity("SOFT", CategoryPolicy.STRICT) == 50.0


@pytest.mark.parametrize(
    "field, value",
    [
        ("length", 0.0),
        ("width", -1.0),
        ("height", 0.0),
        ("water_depth", -0.1),
        ("safety_factor", 0.0),
        ("length", float("nan")),
        ("height", float("inf")),
    ],
)
def test_invalid_inputs_rejected(road_input, field, value):
    with pytest.raises(InvalidInputError) as exc:
        calculate(replace(road_input, **{field: value}))
    assert exc.value.field == field


def test_error_message_names_field(road_input):
    with pytest.raises(ValueError, match="length must be positive"):
        validate_input(replace(road_input, length=-5.0))


def test_dry_crossing_allowed(road_input):
    res = calculate(replace(road_input, water_depth=0.0))
    assert res.recommendation.considerations.scour_protection_depth == 0.0


def test_volume_scales_with_cube(road_input):
    k = 2.0
    base = calculate(road_input)
    scaled = calculate(replace(road_input, length=100 * k, width=8 * k, height=2 * k))
    assert scaled.structural.volume == pytest.approx(base.structural.volume * k ** 3)
    assert scaled.structural.materials.steel == pytest.approx(base.structural.materials.steel * k ** 3)


def test_margin_decreases_with_height(road_input):
    margins = [calculate(replace(road_input, height=h)).safety_margin for h in (1.0, 2.0, 3.0, 5.0)]
    assert all(a > b for a, b in zip(margins, margins[1:]))


def test_is_safe_follows_required_factor(road_input):
    assert calculate(replace(road_input, safety_factor=18.0)).recommendation.is_safe
    assert not calculate(replace(road_input, safety_factor=20.0)).recommendation.is_safe


def test_high_pressure_selects_piles(road_input):
    # pressure = (2.4 H + 5) / 1.2 exceeds 100 only for very tall sections
    res = calculate(replace(road_input, height=60.0, soil_type="hard"))
    assert res.structural.foundation_pressure > 100.0
    assert res.recommendation.foundation_type == FoundationType.PILE


def test_considerations(road_result):
    c = road_result.recommendation.considerations
    assert c.expansion_joints == math.ceil(100 / 30)
    assert c.longitudinal_drains == 4
    assert c.water_level_variation == pytest.approx(0.45)
    assert c.scour_protection_depth == pytest.approx(0.75)
    assert len(c.notes) == 4


def test_trace_matches_results(road_result):
    steps = {step.name: step for step in road_result.trace}
    assert steps["Volume"].result == road_result.structural.volume
    assert steps["Safety Margin"].result == road_result.safety_margin
    assert steps["Bending Moment"].unit == "kN·m"


def test_to_dict_rounds_and_unwraps(road_result):
    d = road_result.to_dict()
    assert d["structural"]["safety_margin"] == 18.37
    assert d["recommendation"]["foundation_type"] == "Spread"
    # full precision is kept on the object itself
    assert road_result.safety_margin != 18.37
