# causeway/comparison.py
# ------------------------------------------------------------
# Side-by-side comparison of two computed designs.
#
# Conventions
# -----------
# - A is the baseline (first / older design), B the candidate.
# - Percent fields:  (B - A) / A * 100   (volume, cost)
# - Absolute fields: B - A               (safety margin, materials)
# - Both designs are costed here with one shared region so the cost
#   difference is like-for-like.
#
from __future__ import annotations

import logging
from typing import Optional, Tuple, Union

from . import constants as C
from .config import CostRates
from .cost import estimate_cost
from .errors import ComparisonPrereqError
from .models import CalculationResult, CategoryPolicy, ComparisonResult, MaterialDiff, Region
from .sessions import SessionStore

logger = logging.getLogger(__name__)


def compare(
    baseline: CalculationResult,
    candidate: CalculationResult,
    region: Union[str, Region] = Region.STANDARD,
    rates: Optional[CostRates] = None,
    policy: CategoryPolicy = CategoryPolicy.STRICT,
) -> ComparisonResult:
    """
    Diff a candidate design against a baseline.

    Raises
    ------
    ComparisonPrereqError
        A design is missing, or the baseline volume/cost is zero.
    InvalidRegionError
        Unknown cost region.
    """
    if baseline is None or candidate is None:
        raise ComparisonPrereqError("Both a baseline and a candidate design are required")
    if baseline.structural.volume <= 0.0:
        raise ComparisonPrereqError("Baseline volume must be positive to compute percent differences")

    base_cost = estimate_cost(baseline.structural.materials, region, rates, policy)
    cand_cost = estimate_cost(candidate.structural.materials, region, rates, policy)
    if base_cost.total <= 0.0:
        raise ComparisonPrereqError("Baseline cost must be positive to compute percent differences")

    volume_diff = _pct(baseline.structural.volume, candidate.structural.volume)
    cost_diff = _pct(base_cost.total, cand_cost.total)
    safety_diff = candidate.structural.safety_margin - baseline.structural.safety_margin
    material_diff = MaterialDiff(
        concrete=candidate.structural.materials.concrete - baseline.structural.materials.concrete,
        steel=candidate.structural.materials.steel - baseline.structural.materials.steel,
    )
    preferred, text = recommend(
        safety_diff,
        cost_diff,
        baseline_safe=baseline.recommendation.is_safe,
        candidate_safe=candidate.recommendation.is_safe,
    )

    logger.info(
        f"Compared designs: volume {volume_diff:+.2f}%, cost {cost_diff:+.2f}%, "
        f"safety {safety_diff:+.2f} -> {preferred}"
    )
    return ComparisonResult(
        volume_diff_pct=volume_diff,
        cost_diff_pct=cost_diff,
        safety_diff=safety_diff,
        material_diff=material_diff,
        preferred=preferred,
        recommendation=text,
        baseline_cost=base_cost.total,
        candidate_cost=cand_cost.total,
        region=base_cost.region,
    )


def compare_sessions(
    store: SessionStore,
    baseline_id: str,
    candidate_id: str,
    region: Union[str, Region] = Region.STANDARD,
    rates: Optional[CostRates] = None,
    policy: CategoryPolicy = CategoryPolicy.STRICT,
) -> ComparisonResult:
    """Load two stored sessions (snapshots) and compare their results."""
    baseline = store.load(baseline_id)
    candidate = store.load(candidate_id)
    return compare(baseline.result, candidate.result, region=region, rates=rates, policy=policy)


def recommend(
    safety_diff: float,
    cost_diff_pct: float,
    baseline_safe: bool = True,
    candidate_safe: bool = True,
    tolerance: float = C.COST_TOLERANCE_PCT,
) -> Tuple[str, str]:
    """
    Sign/magnitude rules, first match wins. Returns (preferred, text).
    """
    if baseline_safe and not candidate_safe:
        return "baseline", "Baseline design is preferred: the candidate does not meet the required safety factor"
    if candidate_safe and not baseline_safe:
        return "candidate", "Candidate design is preferred: it restores the required safety factor"

    cheaper = cost_diff_pct < -tolerance
    no_dearer = cost_diff_pct <= tolerance

    if safety_diff > 0 and no_dearer:
        return "candidate", "Candidate offers better balance of safety and economy"
    if safety_diff == 0 and cheaper:
        return "candidate", "Candidate achieves the same safety margin at lower cost"
    if safety_diff < 0 and cheaper:
        return (
            "candidate",
            f"Candidate is {abs(cost_diff_pct):.1f}% cheaper with a safety margin "
            f"{abs(safety_diff):.2f} lower; verify it remains acceptable",
        )
    if safety_diff > 0:
        return (
            "either",
            f"Candidate improves the safety margin by {safety_diff:.2f} "
            f"at {cost_diff_pct:.1f}% higher cost",
        )
    if safety_diff < 0 or cost_diff_pct > tolerance:
        return "baseline", "Baseline offers better balance of safety and economy"
    return "either", "Designs are equivalent in safety and cost"


def _pct(a: float, b: float) -> float:
    return (b - a) / a * 100.0


__all__ = ["compare", "compare_sessions", "recommend"]
