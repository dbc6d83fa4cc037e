# causeway/cost.py
# ------------------------------------------------------------
# Cost estimate from material quantities.
#
# Model
# -----
#   line_i      = quantity_i * unit_rate_i * region_multiplier
#   excavation  = concrete volume * excavation_factor * rate * multiplier
#   materials   = Σ line_i
#   labour      = labor_fraction * materials     (after the multiplier)
#   total       = materials + labour
#   breakdown_i = line_i / total * 100           (labour included)
#
# The region multiplier scales the material lines only; labour follows
# from the adjusted material subtotal.
#
from __future__ import annotations

import logging
from typing import Dict, Optional, Union

from .config import CostRates, category_key, resolve_category
from .errors import InvalidRegionError
from .models import CategoryPolicy, CostEstimate, MaterialQuantities, Region

logger = logging.getLogger(__name__)

LINE_ITEMS = ("concrete", "steel", "formwork", "excavation")


def estimate_cost(
    materials: MaterialQuantities,
    region: Union[str, Region] = Region.STANDARD,
    rates: Optional[CostRates] = None,
    policy: CategoryPolicy = CategoryPolicy.STRICT,
) -> CostEstimate:
    """
    Price a material take-off for a region.

    Parameters
    ----------
    materials : MaterialQuantities from the structural calculator
    region    : "standard" | "urban" | "rural" (or a Region member)
    rates     : unit rate table; defaults to CostRates()
    policy    : strict raises InvalidRegionError for an unknown region,
                lenient falls back to the standard multiplier

    Returns
    -------
    CostEstimate
    """
    rates = rates or CostRates()
    multiplier = region_multiplier(region, rates, policy)
    resolved = category_key(region)
    if resolved not in rates.region_multipliers:
        resolved = Region.STANDARD.value

    quantities = {
        "concrete": materials.concrete,
        "steel": materials.steel,
        "formwork": materials.formwork,
        "excavation": materials.concrete * rates.excavation_factor,
    }
    lines: Dict[str, float] = {
        item: quantities[item] * rates.unit_rate(item) * multiplier for item in LINE_ITEMS
    }

    material_total = sum(lines.values())
    labor = material_total * rates.labor_fraction
    total = material_total + labor

    breakdown = _breakdown(lines, labor, total)

    logger.debug(
        f"Cost estimate ({resolved}, x{multiplier:.2f}): "
        f"materials {material_total:.0f}, labour {labor:.0f}, total {total:.0f} {rates.currency}"
    )
    return CostEstimate(
        materials=lines,
        material_total=material_total,
        labor=labor,
        total=total,
        breakdown=breakdown,
        region=resolved,
        multiplier=multiplier,
        currency=rates.currency,
    )


def region_multiplier(
    region: Union[str, Region],
    rates: Optional[CostRates] = None,
    policy: CategoryPolicy = CategoryPolicy.STRICT,
) -> float:
    """Material cost multiplier for a region key (standard 1.0, urban 1.20, rural 0.85)."""
    rates = rates or CostRates()
    fallback = rates.region_multipliers.get(Region.STANDARD.value, 1.0)
    return resolve_category(rates.region_multipliers, region, policy, fallback, InvalidRegionError)


def _breakdown(lines: Dict[str, float], labor: float, total: float) -> Dict[str, float]:
    if total <= 0.0:
        return {**{item: 0.0 for item in lines}, "labor": 0.0}
    pct = {item: value / total * 100.0 for item, value in lines.items()}
    pct["labor"] = labor / total * 100.0
    return pct


__all__ = ["estimate_cost", "region_multiplier", "LINE_ITEMS"]
