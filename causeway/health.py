# causeway/health.py
# ------------------------------------------------------------
# Composite 0-100 design health score.
#
# Four independent step functions, each driven by one metric of an
# already computed design:
#   safety        <- safety margin (more is better)
#   economy       <- safety margin (inverted U, optimum around 2.0)
#   environmental <- concrete volume per metre of causeway
#   structural    <- deck bending moment and deflection
#
from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from . import constants as C
from .models import (
    CalculationResult,
    HealthRating,
    HealthRecommendation,
    HealthScore,
    SubScores,
)

_RECOMMENDATIONS = (
    ("safety", "Safety", "Consider increasing safety factor or foundation dimensions", "high"),
    ("economy", "Economy", "Design may be over-engineered. Review optimization suggestions", "medium"),
    ("environmental", "Environmental",
     "Consider reducing material volume or using sustainable materials", "medium"),
    ("structural", "Structural", "Review structural analysis for potential improvements", "low"),
)


def _at_least(value: float, steps: Sequence[Tuple[float, int]], floor: int) -> int:
    for threshold, score in steps:
        if value >= threshold:
            return score
    return floor


def _at_most(value: float, steps: Sequence[Tuple[float, int]], floor: int) -> int:
    for threshold, score in steps:
        if value <= threshold:
            return score
    return floor


def safety_score(safety_margin: float) -> int:
    return _at_least(safety_margin, C.SAFETY_SCORE_STEPS, C.SAFETY_SCORE_FLOOR)


def economy_score(safety_margin: float) -> int:
    """Rewards "just enough" margin: over-design above 2.0 is penalised."""
    return _at_least(safety_margin, C.ECONOMY_SCORE_STEPS, C.ECONOMY_SCORE_FLOOR)


def environmental_score(volume_per_metre: float) -> int:
    return _at_most(volume_per_metre, C.ENVIRONMENTAL_SCORE_STEPS, C.ENVIRONMENTAL_SCORE_FLOOR)


def structural_score(bending_moment: float, deflection: float) -> int:
    score = C.STRUCTURAL_BASE_SCORE
    if bending_moment > C.BENDING_MOMENT_LIMIT:
        score -= C.STRUCTURAL_PENALTY
    if deflection > C.DEFLECTION_LIMIT:
        score -= C.STRUCTURAL_PENALTY
    return max(C.STRUCTURAL_SCORE_FLOOR, score)


def rating_for(overall: float) -> HealthRating:
    for lower, label in C.HEALTH_RATING_BANDS:
        if overall >= lower:
            return HealthRating(label)
    return HealthRating.NEEDS_IMPROVEMENT


def score(res: CalculationResult) -> HealthScore:
    """
    Combine the four sub-scores into one health score.

    overall is the arithmetic mean rounded half-up; the rating bands
    (90/80/70/60) are applied to that rounded value.
    """
    margin = res.structural.safety_margin
    scores = SubScores(
        safety=safety_score(margin),
        economy=economy_score(margin),
        environmental=environmental_score(res.structural.volume / res.inputs.length),
        structural=structural_score(res.beam.bending_moment, res.beam.deflection),
    )
    mean = sum(scores.as_dict().values()) / 4.0
    overall = int(math.floor(mean + 0.5))

    return HealthScore(
        overall=overall,
        scores=scores,
        rating=rating_for(overall),
        recommendations=recommendations_for(scores),
    )


def recommendations_for(scores: SubScores) -> List[HealthRecommendation]:
    values = scores.as_dict()
    return [
        HealthRecommendation(category=category, message=message, priority=priority)
        for key, category, message, priority in _RECOMMENDATIONS
        if values[key] < C.HEALTH_RECOMMENDATION_THRESHOLD
    ]


__all__ = [
    "safety_score",
    "economy_score",
    "environmental_score",
    "structural_score",
    "rating_for",
    "score",
    "recommendations_for",
]
