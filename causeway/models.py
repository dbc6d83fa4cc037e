# causeway/models.py
# ------------------------------------------------------------
# Core data models for the submersible causeway design tool.
# The only local import is the exception taxonomy (errors.py has no
# local imports), so there are no circular-import issues.
#
# Units convention (consistent across the codebase):
# - Lengths: metres (m)
# - Areas: m^2, volumes: m^3
# - Steel quantities: tonnes (t)
# - Loads and pressures: load units of the closed-form model
#   (dead load = volume * 2.4, live load = area * 5)
# - Costs: currency of the active rate table (INR by default)
# - Carbon: kg CO2e
#
# This file is purely data containers + tiny helpers.
# All calculations live in structural.py / cost.py / optimization.py /
# environment.py / health.py / comparison.py.

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .errors import InvalidInputError


# -----------------------------
# Enumerations
# -----------------------------
class SoilType(str, Enum):
    SOFT = "soft"
    MEDIUM = "medium"
    HARD = "hard"


class Region(str, Enum):
    STANDARD = "standard"
    URBAN = "urban"
    RURAL = "rural"


class CategoryPolicy(str, Enum):
    LENIENT = "lenient"  # unknown key -> documented default (logged)
    STRICT = "strict"    # unknown key -> UnknownCategoryError


class FoundationType(str, Enum):
    PILE = "Pile"
    SPREAD = "Spread"


class ConstructionMethod(str, Enum):
    COFFERDAM = "Cofferdam Method"
    DIRECT = "Direct"


class SuggestionType(str, Enum):
    COST_REDUCTION = "cost_reduction"
    MATERIAL_OPTIMIZATION = "material_optimization"
    HYDRAULIC_OPTIMIZATION = "hydraulic_optimization"
    FOUNDATION_OPTIMIZATION = "foundation_optimization"


class RiskLevel(str, Enum):
    LOW = "low_risk"
    MEDIUM = "medium_risk"
    HIGH = "high_risk"


class EnvironmentalRating(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    NEEDS_IMPROVEMENT = "Needs Improvement"


class HealthRating(str, Enum):
    EXCELLENT = "Excellent"
    VERY_GOOD = "Very Good"
    GOOD = "Good"
    FAIR = "Fair"
    NEEDS_IMPROVEMENT = "Needs Improvement"


# -----------------------------
# Design Inputs
# -----------------------------
_INPUT_KEY_ALIASES = {
    "waterDepth": "water_depth",
    "soilType": "soil_type",
    "loadType": "load_type",
    "safetyFactor": "safety_factor",
}
_REQUIRED_INPUT_FIELDS = ("length", "width", "height", "water_depth", "soil_type", "safety_factor")


@dataclass(frozen=True)
class DesignInput:
    """
    Geometric and site parameters of one causeway design.

    Geometry
    --------
    length        : Causeway length along the crossing, m.
    width         : Deck width, m.
    height        : Structure height above bed, m.
    water_depth   : Normal water depth at the crossing, m (0 allowed).

    Site & criteria
    ---------------
    soil_type     : "soft" | "medium" | "hard". Any other string is accepted
                    here; the calculator's soil policy decides what happens.
    load_type     : Traffic category label (pedestrian, light, heavy, ...).
                    Used for labelling only.
    safety_factor : Required bearing safety margin.
    """
    length: float
    width: float
    height: float
    water_depth: float
    soil_type: str = SoilType.MEDIUM.value
    load_type: str = "light"
    safety_factor: float = 2.5

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["soil_type"] = _enum_value(self.soil_type)
        d["load_type"] = _enum_value(self.load_type)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DesignInput":
        """
        Build inputs from a plain mapping (library files, form posts).

        Accepts the snake_case field names and the camelCase names used by
        older design libraries (waterDepth, soilType, loadType, safetyFactor).
        Every field except load_type is required.

        Raises
        ------
        InvalidInputError
            Not a mapping, a required field missing, or a non-numeric value.
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                f"Design inputs must be a mapping (got {type(data).__name__})",
                field="inputs",
                value=data,
            )
        values = {_INPUT_KEY_ALIASES.get(key, key): value for key, value in data.items()}
        missing = [name for name in _REQUIRED_INPUT_FIELDS if name not in values]
        if missing:
            raise InvalidInputError(
                f"Design inputs missing required field(s): {', '.join(missing)}",
                field=missing[0],
            )

        def number(name: str) -> float:
            try:
                return float(values[name])
            except (TypeError, ValueError):
                raise InvalidInputError(
                    f"{name} must be a number (got {values[name]!r})", field=name, value=values[name]
                )

        return cls(
            length=number("length"),
            width=number("width"),
            height=number("height"),
            water_depth=number("water_depth"),
            soil_type=str(values["soil_type"]),
            load_type=str(values.get("load_type", "light")),
            safety_factor=number("safety_factor"),
        )


# -----------------------------
# Structural results
# -----------------------------
@dataclass(frozen=True)
class MaterialQuantities:
    """concrete [m^3], steel [t], formwork [m^2]."""
    concrete: float
    steel: float
    formwork: float


@dataclass(frozen=True)
class StructuralResult:
    volume: float
    surface_area: float
    perimeter: float
    dead_load: float
    live_load: float
    total_load: float
    foundation_area: float
    soil_bearing_capacity: float
    foundation_pressure: float
    safety_margin: float
    materials: MaterialQuantities

    @property
    def bearing_utilisation(self) -> float:
        """foundation_pressure / soil_bearing_capacity (1.0 = fully used)."""
        return self.foundation_pressure / self.soil_bearing_capacity


@dataclass(frozen=True)
class BeamAnalysis:
    """
    Simply supported deck idealisation used for the structural sub-score.

    distributed_load         : total load / deck area
    bending_moment           : w L^2 / 8
    allowable_bending_moment : 0.45 fck Z
    deflection               : 5 w L^4 / (384 E I)
    allowable_deflection     : L / 250
    """
    distributed_load: float
    bending_moment: float
    allowable_bending_moment: float
    deflection: float
    allowable_deflection: float

    @property
    def within_limits(self) -> bool:
        return (
            self.bending_moment < self.allowable_bending_moment
            and self.deflection < self.allowable_deflection
        )


@dataclass(frozen=True)
class DesignConsiderations:
    expansion_joints: int
    longitudinal_drains: int
    water_level_variation: float
    scour_protection_depth: float
    notes: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Recommendation:
    is_safe: bool
    foundation_type: FoundationType
    construction_method: ConstructionMethod
    considerations: Optional[DesignConsiderations] = None


@dataclass(frozen=True)
class TraceStep:
    """One applied formula, with the numbers substituted in."""
    category: str
    name: str
    formula: str
    substituted: str
    result: float
    unit: str = ""


@dataclass(frozen=True)
class CalculationResult:
    """
    Everything the structural calculator produces for one DesignInput.

    Values are held at full precision; ``to_dict`` rounds reals for display.
    """
    inputs: DesignInput
    structural: StructuralResult
    recommendation: Recommendation
    beam: BeamAnalysis
    trace: List[TraceStep] = field(default_factory=list)

    @property
    def safety_margin(self) -> float:
        return self.structural.safety_margin

    @property
    def materials(self) -> MaterialQuantities:
        return self.structural.materials

    def summary(self) -> str:
        """One-line human-readable summary."""
        status = "SAFE" if self.recommendation.is_safe else "NOT SAFE"
        return (
            f"Safety margin {self.structural.safety_margin:.2f} "
            f"(required {self.inputs.safety_factor:.2f}) → {status}; "
            f"{self.recommendation.foundation_type.value} foundation, "
            f"{self.recommendation.construction_method.value}"
        )

    def to_dict(self, precision: Optional[int] = 2) -> Dict[str, Any]:
        return _rounded(asdict(self), precision)


# -----------------------------
# Optimization
# -----------------------------
@dataclass(frozen=True)
class OptimizationSuggestion:
    type: SuggestionType
    suggestion: str
    potential_savings: str
    impact: RiskLevel


@dataclass(frozen=True)
class OptimizationReport:
    suggestions: List[OptimizationSuggestion]
    summary: str
    safety_note: str
    is_safe: bool

    @property
    def is_optimized(self) -> bool:
        return self.is_safe and not self.suggestions


# -----------------------------
# Cost
# -----------------------------
@dataclass(frozen=True)
class CostEstimate:
    """
    materials  : region-adjusted cost per line (concrete, steel, formwork, excavation)
    breakdown  : percent of total per line, labour included
    """
    materials: Dict[str, float]
    material_total: float
    labor: float
    total: float
    breakdown: Dict[str, float]
    region: str
    multiplier: float
    currency: str = "INR"

    def to_dict(self, precision: Optional[int] = 2) -> Dict[str, Any]:
        return _rounded(asdict(self), precision)


# -----------------------------
# Environment
# -----------------------------
@dataclass(frozen=True)
class CarbonFootprint:
    """kg CO2e."""
    concrete: float
    steel: float
    total: float

    @property
    def tonnes(self) -> float:
        return self.total / 1000.0


@dataclass(frozen=True)
class WaterImpact:
    flow_obstruction: float  # percent of channel cross-section
    scour_depth: float       # m
    channel_width: float     # m, the width assumed for the obstruction ratio
    rating: EnvironmentalRating


@dataclass(frozen=True)
class EnvironmentalAssessment:
    carbon: CarbonFootprint
    water: WaterImpact
    impact_score: float
    rating: EnvironmentalRating
    recommendations: List[str]

    def to_dict(self, precision: Optional[int] = 2) -> Dict[str, Any]:
        return _rounded(asdict(self), precision)


# -----------------------------
# Health score
# -----------------------------
@dataclass(frozen=True)
class SubScores:
    safety: int
    economy: int
    environmental: int
    structural: int

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class HealthRecommendation:
    category: str
    message: str
    priority: str


@dataclass(frozen=True)
class HealthScore:
    overall: int
    scores: SubScores
    rating: HealthRating
    recommendations: List[HealthRecommendation]


# -----------------------------
# Comparison
# -----------------------------
@dataclass(frozen=True)
class MaterialDiff:
    concrete: float
    steel: float


@dataclass(frozen=True)
class ComparisonResult:
    """
    Candidate (B) relative to baseline (A).

    volume_diff_pct / cost_diff_pct : (B - A) / A * 100
    safety_diff / material_diff     : B - A
    preferred                       : "baseline" | "candidate" | "either"
    """
    volume_diff_pct: float
    cost_diff_pct: float
    safety_diff: float
    material_diff: MaterialDiff
    preferred: str
    recommendation: str
    baseline_cost: float
    candidate_cost: float
    region: str

    def to_dict(self, precision: Optional[int] = 2) -> Dict[str, Any]:
        return _rounded(asdict(self), precision)


# -----------------------------
# Sessions
# -----------------------------
@dataclass(frozen=True)
class DesignSession:
    id: str
    name: str
    timestamp: str
    inputs: DesignInput
    result: CalculationResult


@dataclass(frozen=True)
class SessionSummary:
    id: str
    name: str
    timestamp: str


# -----------------------------
# Helpers
# -----------------------------
def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _rounded(obj: Any, precision: Optional[int]) -> Any:
    """Recursively round floats and unwrap enums in an asdict() tree."""
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, float):
        return obj if precision is None else round(obj, precision)
    if isinstance(obj, dict):
        return {k: _rounded(v, precision) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_rounded(v, precision) for v in obj]
    return obj


# Friendly export list
__all__ = [
    "SoilType",
    "Region",
    "CategoryPolicy",
    "FoundationType",
    "ConstructionMethod",
    "SuggestionType",
    "RiskLevel",
    "EnvironmentalRating",
    "HealthRating",
    "DesignInput",
    "MaterialQuantities",
    "StructuralResult",
    "BeamAnalysis",
    "DesignConsiderations",
    "Recommendation",
    "TraceStep",
    "CalculationResult",
    "OptimizationSuggestion",
    "OptimizationReport",
    "CostEstimate",
    "CarbonFootprint",
    "WaterImpact",
    "EnvironmentalAssessment",
    "SubScores",
    "HealthRecommendation",
    "HealthScore",
    "MaterialDiff",
    "ComparisonResult",
    "DesignSession",
    "SessionSummary",
]
