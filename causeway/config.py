"""
Configuration for the causeway design core.

Holds the tunable tables (unit rates, region multipliers) and the lookup
policies for enum-like string inputs, and loads overrides from the
environment.

Usage:
    config = CausewayConfig.from_env()
    result = calculate(inp, config=config)
    estimate = estimate_cost(result.materials, "urban", rates=config.cost_rates,
                             policy=config.region_policy)
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type

from dotenv import load_dotenv

from . import constants as C
from .errors import UnknownCategoryError
from .models import CategoryPolicy, Region

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CostRates:
    """Unit rate table used by the cost estimator.

    Attributes:
        concrete: Cost per m³ of concrete
        steel: Cost per tonne of reinforcement
        formwork: Cost per m² of formwork
        excavation: Cost per m³ of excavation
        excavation_factor: Excavated volume as a multiple of concrete volume
        labor_fraction: Labour as a fraction of the region-adjusted material cost
        region_multipliers: Material cost multiplier per region key
        currency: Currency label carried into estimates
    """

    concrete: float = C.UNIT_RATES["concrete"]
    steel: float = C.UNIT_RATES["steel"]
    formwork: float = C.UNIT_RATES["formwork"]
    excavation: float = C.UNIT_RATES["excavation"]
    excavation_factor: float = C.EXCAVATION_FACTOR
    labor_fraction: float = C.LABOR_FRACTION
    region_multipliers: Dict[str, float] = field(
        default_factory=lambda: dict(C.REGION_MULTIPLIERS)
    )
    currency: str = C.CURRENCY

    def __post_init__(self):
        for name in ("concrete", "steel", "formwork", "excavation", "excavation_factor"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"Cost rate '{name}' must be finite (got {value})")
            if value < 0:
                raise ValueError(f"Cost rate '{name}' cannot be negative")
        if not math.isfinite(self.labor_fraction) or self.labor_fraction < 0:
            raise ValueError(f"Labour fraction must be finite and non-negative (got {self.labor_fraction})")
        if not self.region_multipliers:
            raise ValueError("At least one region multiplier is required")
        for region, multiplier in self.region_multipliers.items():
            if not math.isfinite(multiplier) or multiplier <= 0:
                raise ValueError(f"Region multiplier for '{region}' must be positive and finite")

    def unit_rate(self, item: str) -> float:
        return float(getattr(self, item))


@dataclass(frozen=True)
class CausewayConfig:
    """Runtime configuration of the design core.

    Attributes:
        soil_policy: Unknown soil types default to 100 (lenient) or raise (strict)
        region_policy: Unknown regions fall back to standard (lenient) or raise (strict)
        default_region: Region used when none is given (estimates, comparisons)
        channel_width: Channel width for the flow-obstruction ratio; None uses
            the causeway length
        cost_rates: Unit rate table
    """

    soil_policy: CategoryPolicy = CategoryPolicy.LENIENT
    region_policy: CategoryPolicy = CategoryPolicy.STRICT
    default_region: str = Region.STANDARD.value
    channel_width: Optional[float] = None
    cost_rates: CostRates = field(default_factory=CostRates)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.channel_width is not None and (
            not math.isfinite(self.channel_width) or self.channel_width <= 0
        ):
            raise ValueError(f"Channel width must be positive and finite (got {self.channel_width})")

        if self.default_region not in self.cost_rates.region_multipliers:
            raise ValueError(
                f"Default region '{self.default_region}' has no multiplier. "
                f"Known regions: {', '.join(self.cost_rates.region_multipliers)}"
            )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "CausewayConfig":
        """Load configuration from environment variables.

        Args:
            env_file: Optional path to a .env file loaded before reading

        Returns:
            CausewayConfig instance with loaded configuration

        Raises:
            ValueError: If a variable holds an invalid value
            FileNotFoundError: If env_file is specified but doesn't exist

        Environment Variables:
            CAUSEWAY_SOIL_POLICY: lenient | strict
            CAUSEWAY_REGION_POLICY: lenient | strict
            CAUSEWAY_DEFAULT_REGION: standard | urban | rural
            CAUSEWAY_CHANNEL_WIDTH: Channel width in metres
            CAUSEWAY_CURRENCY: Currency label
            CAUSEWAY_RATE_CONCRETE / _STEEL / _FORMWORK / _EXCAVATION: Unit rates
            CAUSEWAY_LABOR_FRACTION: Labour fraction of material cost
        """
        if env_file:
            if not load_dotenv(env_file):
                raise FileNotFoundError(f".env file not found: {env_file}")

        soil_policy = _policy_from_env("CAUSEWAY_SOIL_POLICY", CategoryPolicy.LENIENT)
        region_policy = _policy_from_env("CAUSEWAY_REGION_POLICY", CategoryPolicy.STRICT)
        default_region = os.getenv("CAUSEWAY_DEFAULT_REGION", Region.STANDARD.value).strip().lower()

        channel_width = _float_from_env("CAUSEWAY_CHANNEL_WIDTH", None)

        defaults = CostRates()
        cost_rates = CostRates(
            concrete=_float_from_env("CAUSEWAY_RATE_CONCRETE", defaults.concrete),
            steel=_float_from_env("CAUSEWAY_RATE_STEEL", defaults.steel),
            formwork=_float_from_env("CAUSEWAY_RATE_FORMWORK", defaults.formwork),
            excavation=_float_from_env("CAUSEWAY_RATE_EXCAVATION", defaults.excavation),
            labor_fraction=_float_from_env("CAUSEWAY_LABOR_FRACTION", defaults.labor_fraction),
            currency=os.getenv("CAUSEWAY_CURRENCY", defaults.currency),
        )

        config = cls(
            soil_policy=soil_policy,
            region_policy=region_policy,
            default_region=default_region,
            channel_width=channel_width,
            cost_rates=cost_rates,
        )
        logger.info(
            f"Loaded causeway config (soil policy: {soil_policy.value}, "
            f"region policy: {region_policy.value}, default region: {default_region})"
        )
        return config


# -----------------------------
# Category lookup shared by soil and region tables
# -----------------------------
def category_key(value: Any) -> str:
    """Normalise an enum member or free string to a lookup key."""
    if isinstance(value, Enum):
        value = value.value
    return str(value).strip().lower()


def resolve_category(
    table: Mapping[str, float],
    value: Any,
    policy: CategoryPolicy,
    default: float,
    error_cls: Type[UnknownCategoryError],
) -> float:
    """
    Look ``value`` up in ``table`` under the given policy.

    Strict raises ``error_cls``; lenient logs a warning and returns ``default``.
    """
    key = category_key(value)
    if key in table:
        return table[key]
    if CategoryPolicy(policy) == CategoryPolicy.STRICT:
        raise error_cls(value, list(table))
    logger.warning(f"Unrecognised key '{value}', using default {default}")
    return default


def _policy_from_env(name: str, default: CategoryPolicy) -> CategoryPolicy:
    raw = os.getenv(name, default.value).strip().lower()
    try:
        return CategoryPolicy(raw)
    except ValueError:
        raise ValueError(f"Invalid {name}: {raw}. Must be one of: lenient, strict")


def _float_from_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"Invalid {name}: {raw}. Must be a number")
    if not math.isfinite(value):
        raise ValueError(f"Invalid {name}: {raw}. Must be a finite number")
    return value


__all__ = [
    "CostRates",
    "CausewayConfig",
    "category_key",
    "resolve_category",
]
