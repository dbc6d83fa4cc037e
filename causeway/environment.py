# causeway/environment.py
# ------------------------------------------------------------
# Environmental impact of a computed design: embodied carbon and the
# hydraulic footprint of the structure in the channel.
#
# Model
# -----
#   carbon.concrete   = concrete [m^3] * 410 kg/m^3
#   carbon.steel      = steel [t] * 1850 kg/t
#   flow_obstruction  = (W * H) / (B_channel * depth) * 100, capped at 100
#   scour_depth       = soil factor * depth
#   impact_score      = w_c * carbon component + w_f * flow_obstruction
#                       (each 0..100, lower is better)
#
# Channel geometry is not modelled. The obstruction ratio therefore
# assumes a rectangular channel whose width defaults to the causeway
# length (the causeway spans the channel). Pass channel_width to use a
# surveyed value instead. A dry crossing (depth 0) obstructs no flow.
#
from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from . import constants as C
from .config import category_key
from .models import (
    CalculationResult,
    CarbonFootprint,
    EnvironmentalAssessment,
    EnvironmentalRating,
    WaterImpact,
)

logger = logging.getLogger(__name__)


def carbon_footprint(concrete: float, steel: float) -> CarbonFootprint:
    concrete_co2 = concrete * C.CONCRETE_CARBON_RATE
    steel_co2 = steel * C.STEEL_CARBON_RATE
    return CarbonFootprint(concrete=concrete_co2, steel=steel_co2, total=concrete_co2 + steel_co2)


def flow_obstruction(width: float, height: float, channel_width: float, water_depth: float) -> float:
    """Percent of the wetted channel section blocked by the causeway body."""
    if water_depth <= 0.0:
        return 0.0
    if channel_width <= 0.0:
        raise ValueError("channel_width must be > 0.")
    pct = (width * height) / (channel_width * water_depth) * 100.0
    return min(pct, 100.0)


def scour_depth(soil_type: str, water_depth: float) -> float:
    factor = C.SCOUR_FACTORS.get(category_key(soil_type), C.DEFAULT_SCOUR_FACTOR)
    return factor * water_depth


def rating_for(score: float) -> EnvironmentalRating:
    for upper, label in C.ENVIRONMENTAL_BANDS:
        if score < upper:
            return EnvironmentalRating(label)
    return EnvironmentalRating.NEEDS_IMPROVEMENT


def assess(
    res: CalculationResult,
    channel_width: Optional[float] = None,
    weights: Optional[Mapping[str, float]] = None,
) -> EnvironmentalAssessment:
    """
    Carbon footprint, water impact, rating and recommendations for a design.

    Parameters
    ----------
    res           : CalculationResult from the structural calculator
    channel_width : channel width [m]; None assumes the causeway length
    weights       : {"carbon": w_c, "flow_obstruction": w_f}
    """
    inp = res.inputs
    weights = weights or C.ENVIRONMENTAL_WEIGHTS
    channel = channel_width if channel_width is not None else inp.length

    carbon = carbon_footprint(res.structural.materials.concrete, res.structural.materials.steel)
    obstruction = flow_obstruction(inp.width, inp.height, channel, inp.water_depth)
    scour = scour_depth(inp.soil_type, inp.water_depth)

    carbon_per_metre = carbon.total / inp.length
    carbon_component = min(carbon_per_metre / C.CARBON_REFERENCE_PER_METRE * 100.0, 100.0)
    impact_score = (
        weights["carbon"] * carbon_component
        + weights["flow_obstruction"] * obstruction
    )
    rating = rating_for(impact_score)

    water = WaterImpact(
        flow_obstruction=obstruction,
        scour_depth=scour,
        channel_width=channel,
        rating=rating_for(obstruction),
    )
    recommendations = _recommendations(rating, obstruction, scour)

    logger.debug(
        f"Environmental impact score {impact_score:.1f} ({rating.value}); "
        f"carbon {carbon.tonnes:.1f} t CO2e, obstruction {obstruction:.1f}%"
    )
    return EnvironmentalAssessment(
        carbon=carbon,
        water=water,
        impact_score=impact_score,
        rating=rating,
        recommendations=recommendations,
    )


def _recommendations(rating: EnvironmentalRating, obstruction: float, scour: float) -> List[str]:
    recs = []
    if rating != EnvironmentalRating.EXCELLENT:
        recs.append("Explore use of recycled aggregates or supplementary cementitious materials")
    if obstruction > C.FLOW_OBSTRUCTION_ADVISORY:
        recs.append("Consider increasing ventway openings to reduce flow obstruction")
    if scour > C.SCOUR_ADVISORY_DEPTH:
        recs.append("Implement bio-engineering scour protection measures")
    if rating in (EnvironmentalRating.FAIR, EnvironmentalRating.NEEDS_IMPROVEMENT):
        recs.append("Reduce section volume per metre to lower embodied carbon")
    return recs or ["Design meets environmental standards"]


__all__ = [
    "carbon_footprint",
    "flow_obstruction",
    "scour_depth",
    "rating_for",
    "assess",
]
