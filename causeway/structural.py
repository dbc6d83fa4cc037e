# causeway/structural.py
# ------------------------------------------------------------
# Orchestration of the structural check:
# - Validates the DesignInput (before any maths)
# - Resolves the soil bearing capacity under the configured policy
# - Computes geometry, loads, foundation pressure and safety margin
# - Derives material quantities and the deck beam idealisation
# - Produces the recommendation and a formula trace
#
# Dependencies
# ------------
# - imports ONLY from causeway.* modules that do NOT import this file, to
#   avoid circular imports.
#
from __future__ import annotations

import logging
import math
from typing import List, Optional

from . import constants as C
from .config import CausewayConfig, resolve_category
from .errors import InvalidInputError, UnknownSoilTypeError
from .loads import (
    allowable_deflection,
    allowable_moment,
    dead_load,
    distributed_load,
    foundation_area,
    foundation_pressure,
    gross_geometry,
    live_load,
    material_takeoff,
    safety_margin,
    second_moment_of_area,
    simply_supported_deflection,
    simply_supported_moment,
)
from .models import (
    BeamAnalysis,
    CalculationResult,
    CategoryPolicy,
    ConstructionMethod,
    DesignConsiderations,
    DesignInput,
    FoundationType,
    MaterialQuantities,
    Recommendation,
    StructuralResult,
    TraceStep,
)

logger = logging.getLogger(__name__)


# -----------------------------
# Public API
# -----------------------------
def calculate(inp: DesignInput, config: Optional[CausewayConfig] = None) -> CalculationResult:
    """
    Master entry point. Turns raw design parameters into physical quantities
    and a recommendation.

    Raises
    ------
    InvalidInputError
        Non-positive length/width/height, negative depth, non-positive
        safety factor, or any non-finite number.
    UnknownSoilTypeError
        Unrecognised soil type under the strict soil policy.

    Returns
    -------
    CalculationResult
    """
    config = config or CausewayConfig()
    validate_input(inp)
    bearing = soil_bearing_capacity(inp.soil_type, config.soil_policy)

    structural = _structural_result(inp, bearing)
    beam = _beam_analysis(inp, structural)
    recommendation = _recommendation(inp, structural)
    trace = _trace(inp, structural, beam)

    result = CalculationResult(
        inputs=inp,
        structural=structural,
        recommendation=recommendation,
        beam=beam,
        trace=trace,
    )
    logger.info(f"Calculated causeway {inp.length}x{inp.width}x{inp.height} m: {result.summary()}")
    return result


def validate_input(inp: DesignInput) -> None:
    """Raise InvalidInputError on the first out-of-range parameter."""
    for name in ("length", "width", "height"):
        value = getattr(inp, name)
        _require_finite(name, value)
        if value <= 0.0:
            raise InvalidInputError(f"{name} must be positive (got {value})", field=name, value=value)

    _require_finite("water_depth", inp.water_depth)
    if inp.water_depth < 0.0:
        raise InvalidInputError(
            f"water_depth cannot be negative (got {inp.water_depth})",
            field="water_depth",
            value=inp.water_depth,
        )

    _require_finite("safety_factor", inp.safety_factor)
    if inp.safety_factor <= 0.0:
        raise InvalidInputError(
            f"safety_factor must be positive (got {inp.safety_factor})",
            field="safety_factor",
            value=inp.safety_factor,
        )


def soil_bearing_capacity(soil_type: str, policy: CategoryPolicy = CategoryPolicy.LENIENT) -> float:
    """
    Safe bearing capacity for a soil class: soft 50, medium 150, hard 300.

    Unrecognised soils return 100 under the lenient policy and raise
    UnknownSoilTypeError under the strict one.
    """
    return resolve_category(
        C.SOIL_BEARING_CAPACITY,
        soil_type,
        policy,
        C.DEFAULT_SOIL_BEARING_CAPACITY,
        UnknownSoilTypeError,
    )


# -----------------------------
# Internal steps
# -----------------------------
def _structural_result(inp: DesignInput, bearing: float) -> StructuralResult:
    volume, surface_area, perimeter = gross_geometry(inp.length, inp.width, inp.height)

    dl = dead_load(volume)
    ll = live_load(surface_area)
    total = dl + ll

    area_f = foundation_area(surface_area)
    pressure = foundation_pressure(total, area_f)
    margin = safety_margin(bearing, pressure)

    concrete, steel, formwork = material_takeoff(volume, surface_area, perimeter, inp.height)

    return StructuralResult(
        volume=volume,
        surface_area=surface_area,
        perimeter=perimeter,
        dead_load=dl,
        live_load=ll,
        total_load=total,
        foundation_area=area_f,
        soil_bearing_capacity=bearing,
        foundation_pressure=pressure,
        safety_margin=margin,
        materials=MaterialQuantities(concrete=concrete, steel=steel, formwork=formwork),
    )


def _beam_analysis(inp: DesignInput, res: StructuralResult) -> BeamAnalysis:
    w = distributed_load(res.total_load, inp.length, inp.width)
    inertia = second_moment_of_area(inp.width, inp.height)
    return BeamAnalysis(
        distributed_load=w,
        bending_moment=simply_supported_moment(w, inp.length),
        allowable_bending_moment=allowable_moment(inp.width, inp.height),
        deflection=simply_supported_deflection(w, inp.length, inertia),
        allowable_deflection=allowable_deflection(inp.length),
    )


def _recommendation(inp: DesignInput, res: StructuralResult) -> Recommendation:
    if res.foundation_pressure > C.PILE_PRESSURE_THRESHOLD:
        foundation = FoundationType.PILE
    else:
        foundation = FoundationType.SPREAD

    if inp.water_depth > C.COFFERDAM_DEPTH_THRESHOLD:
        method = ConstructionMethod.COFFERDAM
    else:
        method = ConstructionMethod.DIRECT

    return Recommendation(
        is_safe=res.safety_margin >= inp.safety_factor,
        foundation_type=foundation,
        construction_method=method,
        considerations=_considerations(inp),
    )


def _considerations(inp: DesignInput) -> DesignConsiderations:
    joints = math.ceil(inp.length / C.EXPANSION_JOINT_SPACING)
    drains = math.ceil(inp.width / C.DRAIN_SPACING)
    variation = inp.water_depth * C.WATER_LEVEL_VARIATION
    scour_depth = inp.water_depth * C.SCOUR_PROTECTION_RATIO
    notes = [
        f"Consider a seasonal water level variation of ±{variation:.2f} m",
        f"Scour protection required where water depth exceeds {scour_depth:.2f} m",
        f"Expansion joints at {joints} locations (every {C.EXPANSION_JOINT_SPACING:.0f} m)",
        f"{drains} longitudinal drains with cross drains every 20 m",
    ]
    return DesignConsiderations(
        expansion_joints=joints,
        longitudinal_drains=drains,
        water_level_variation=variation,
        scour_protection_depth=scour_depth,
        notes=notes,
    )


def _trace(inp: DesignInput, res: StructuralResult, beam: BeamAnalysis) -> List[TraceStep]:
    L, W, H = inp.length, inp.width, inp.height
    return [
        TraceStep("Geometry", "Volume", "V = L × W × H",
                  f"V = {L:g} × {W:g} × {H:g}", res.volume, "m³"),
        TraceStep("Load Analysis", "Dead Load", "DL = V × ρc",
                  f"DL = {res.volume:g} × {C.CONCRETE_DENSITY:g}", res.dead_load),
        TraceStep("Load Analysis", "Live Load", "LL = A × q",
                  f"LL = {res.surface_area:g} × {C.LIVE_LOAD_INTENSITY:g}", res.live_load),
        TraceStep("Foundation Design", "Foundation Pressure", "q = P / (1.2 × A)",
                  f"q = {res.total_load:g} / {res.foundation_area:g}", res.foundation_pressure),
        TraceStep("Foundation Design", "Safety Margin", "FS = q_allow / q",
                  f"FS = {res.soil_bearing_capacity:g} / {res.foundation_pressure:.4g}",
                  res.safety_margin),
        TraceStep("Structural Analysis", "Bending Moment", "M = wL² / 8",
                  f"M = {beam.distributed_load:.4g} × {L:g}² / 8", beam.bending_moment, "kN·m"),
        TraceStep("Structural Analysis", "Deflection", "δ = 5wL⁴ / (384EI)",
                  f"δ = 5 × {beam.distributed_load:.4g} × {L:g}⁴ / (384 × {C.ELASTIC_MODULUS:g} × I)",
                  beam.deflection, "mm"),
    ]


def _require_finite(name: str, value: float) -> None:
    try:
        finite = math.isfinite(value)
    except TypeError:
        raise InvalidInputError(f"{name} must be a number (got {value!r})", field=name, value=value)
    if not finite:
        raise InvalidInputError(f"{name} must be finite (got {value})", field=name, value=value)


__all__ = ["calculate", "validate_input", "soil_bearing_capacity"]
