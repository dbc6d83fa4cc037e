# tests/test_environment.py
# ------------------------------------------------------------
# Environmental assessor: carbon, flow obstruction, scour, rating.
#
from __future__ import annotations

from dataclasses import replace

import pytest

from causeway.environment import assess, carbon_footprint, flow_obstruction, rating_for, scour_depth
from causeway.models import EnvironmentalRating
from causeway.structural import calculate


def test_reference_assessment(road_result):
    env = assess(road_result)
    assert env.carbon.concrete == pytest.approx(1600 * 410)
    assert env.carbon.steel == pytest.approx(128 * 1850)
    assert env.carbon.total == pytest.approx(892_800)
    assert env.carbon.tonnes == pytest.approx(892.8)

    # channel width defaults to the causeway length
    assert env.water.channel_width == 100
    assert env.water.flow_obstruction == pytest.approx(16 / 150 * 100)
    assert env.water.scour_depth == pytest.approx(0.9)
    assert env.water.rating == EnvironmentalRating.EXCELLENT

    assert env.impact_score == pytest.approx(0.5 * 44.64 + 0.5 * 16 / 150 * 100)
    assert env.rating == EnvironmentalRating.GOOD
    assert env.recommendations == [
        "Explore use of recycled aggregates or supplementary cementitious materials"
    ]


def test_channel_width_override(road_result):
    env = assess(road_result, channel_width=200.0)
    assert env.water.flow_obstruction == pytest.approx(16 / 300 * 100)


def test_dry_crossing_has_no_obstruction(road_input):
    env = assess(calculate(replace(road_input, water_depth=0.0)))
    assert env.water.flow_obstruction == 0.0
    assert env.water.scour_depth == 0.0


def test_obstruction_is_capped():
    assert flow_obstruction(8, 2, 1, 1) == 100.0


def test_obstruction_rejects_zero_channel():
    with pytest.raises(ValueError):
        flow_obstruction(8, 2, 0.0, 1.5)


def test_scour_factors():
    assert scour_depth("soft", 2.0) == pytest.approx(2.0)
    assert scour_depth("medium", 2.0) == pytest.approx(1.2)
    assert scour_depth("hard", 2.0) == pytest.approx(0.6)
    assert scour_depth("clay?", 2.0) == pytest.approx(1.2)


def test_rating_bands():
    assert rating_for(24.9) == EnvironmentalRating.EXCELLENT
    assert rating_for(25.0) == EnvironmentalRating.GOOD
    assert rating_for(74.9) == EnvironmentalRating.FAIR
    assert rating_for(75.0) == EnvironmentalRating.NEEDS_IMPROVEMENT


def test_carbon_footprint_is_additive():
    c = carbon_footprint(10.0, 1.0)
    assert c.total == c.concrete + c.steel == 4100.0 + 1850.0


def test_narrow_channel_and_soft_soil_advice(road_input):
    res = calculate(replace(road_input, soil_type="soft", water_depth=2.0))
    env = assess(res, channel_width=10.0)
    # 16 / 20 -> 80 % obstruction, scour 2.0 m
    assert env.water.flow_obstruction == pytest.approx(80.0)
    assert "Consider increasing ventway openings to reduce flow obstruction" in env.recommendations
    assert "Implement bio-engineering scour protection measures" in env.recommendations
    assert env.rating == EnvironmentalRating.FAIR
