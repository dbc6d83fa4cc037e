"""
Design service for the causeway core.

Binds the pure calculators to one SessionStore and one CausewayConfig and
exposes the operations a hosting layer (UI, CLI, HTTP handler) calls.

Usage:
    service = DesignService(SessionStore(), CausewayConfig.from_env())
    result = service.calculate(DesignInput(100, 8, 2, 1.5))
    session_id = service.save_session("Option A", result.inputs, result)
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from . import comparison, cost, environment, health, optimization, structural
from .config import CausewayConfig
from .models import (
    CalculationResult,
    ComparisonResult,
    CostEstimate,
    DesignInput,
    DesignSession,
    EnvironmentalAssessment,
    HealthScore,
    MaterialQuantities,
    OptimizationReport,
    Region,
    SessionSummary,
)
from .sessions import SessionStore

logger = logging.getLogger(__name__)


class DesignService:
    """Facade over the calculators and the session store.

    Attributes:
        store: Session store shared by every caller of this service
        config: Policies, rate table and channel assumptions
    """

    def __init__(self, store: Optional[SessionStore] = None, config: Optional[CausewayConfig] = None):
        self.store = store if store is not None else SessionStore()
        self.config = config or CausewayConfig()

    # ------------------------------------------------------------ calculators
    def calculate(self, inputs: DesignInput) -> CalculationResult:
        return structural.calculate(inputs, self.config)

    def optimize(self, result: CalculationResult) -> OptimizationReport:
        return optimization.analyze(result)

    def estimate_cost(
        self,
        materials: MaterialQuantities,
        region: Union[str, Region, None] = None,
    ) -> CostEstimate:
        return cost.estimate_cost(
            materials,
            region if region is not None else self.config.default_region,
            rates=self.config.cost_rates,
            policy=self.config.region_policy,
        )

    def assess_environment(self, result: CalculationResult) -> EnvironmentalAssessment:
        return environment.assess(result, channel_width=self.config.channel_width)

    def score(self, result: CalculationResult) -> HealthScore:
        return health.score(result)

    # --------------------------------------------------------------- sessions
    def save_session(
        self,
        name: Optional[str],
        inputs: DesignInput,
        result: CalculationResult,
    ) -> str:
        return self.store.save(name, inputs, result)

    def load_session(self, session_id: str) -> DesignSession:
        return self.store.load(session_id)

    def list_sessions(self) -> List[SessionSummary]:
        return self.store.list()

    def delete_session(self, session_id: str) -> None:
        self.store.delete(session_id)

    # ------------------------------------------------------------- comparison
    def compare(
        self,
        baseline_id: str,
        candidate_id: str,
        region: Union[str, Region, None] = None,
    ) -> ComparisonResult:
        """Compare two saved sessions (baseline first)."""
        logger.info(f"Comparing session {baseline_id} (baseline) with {candidate_id}")
        return comparison.compare_sessions(
            self.store,
            baseline_id,
            candidate_id,
            region=self._region(region),
            rates=self.config.cost_rates,
            policy=self.config.region_policy,
        )

    def compare_results(
        self,
        baseline: CalculationResult,
        candidate: CalculationResult,
        region: Union[str, Region, None] = None,
    ) -> ComparisonResult:
        return comparison.compare(
            baseline,
            candidate,
            region=self._region(region),
            rates=self.config.cost_rates,
            policy=self.config.region_policy,
        )

    def region_choices(self) -> List[str]:
        """Known cost regions, the configured default region first."""
        regions = list(self.config.cost_rates.region_multipliers)
        regions.remove(self.config.default_region)
        return [self.config.default_region] + regions

    def _region(self, region: Union[str, Region, None]) -> Union[str, Region]:
        return region if region is not None else self.config.default_region


__all__ = ["DesignService"]
