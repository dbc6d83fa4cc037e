# tests/test_smoke.py
# ------------------------------------------------------------
# Minimal smoke tests for the causeway design engine.
# Run:  pytest -q
#
from __future__ import annotations

import math

from causeway.models import DesignInput
from causeway.service import DesignService
from causeway.structural import calculate


def _default_input(
    length: float = 100.0,
    width: float = 8.0,
    height: float = 2.0,
    water_depth: float = 1.5,
    soil_type: str = "medium",
    safety_factor: float = 2.5,
) -> DesignInput:
    return DesignInput(
        length=length,
        width=width,
        height=height,
        water_depth=water_depth,
        soil_type=soil_type,
        load_type="light",
        safety_factor=safety_factor,
    )


def test_design_runs_and_has_sensible_numbers():
    """Basic: engine returns positive quantities and a finite margin."""
    res = calculate(_default_input())
    s = res.structural
    assert s.volume > 0.0
    assert s.total_load == s.dead_load + s.live_load
    assert s.foundation_area > s.surface_area
    assert math.isfinite(s.safety_margin)
    assert len(res.trace) == 7


def test_full_pipeline_through_service():
    """Every calculator accepts the structural result without error."""
    service = DesignService()
    res = service.calculate(_default_input())

    report = service.optimize(res)
    estimate = service.estimate_cost(res.materials)
    env = service.assess_environment(res)
    health = service.score(res)

    assert report.is_safe
    assert estimate.total > estimate.material_total > 0.0
    assert env.carbon.total > 0.0
    assert 0 <= health.overall <= 100


def test_taller_section_reduces_margin():
    """Height adds dead load but not footprint, so the margin must drop."""
    low = calculate(_default_input(height=1.0))
    high = calculate(_default_input(height=4.0))
    assert high.safety_margin < low.safety_margin


def test_harder_soil_increases_margin():
    """Margin scales with the soil bearing capacity (soft < medium < hard)."""
    margins = [calculate(_default_input(soil_type=s)).safety_margin for s in ("soft", "medium", "hard")]
    assert margins[0] < margins[1] < margins[2]
    assert math.isclose(margins[2] / margins[0], 300.0 / 50.0)
