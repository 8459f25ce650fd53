"""
End-to-end orchestration: portfolio baseline → scenario simulations →
scenario comparison.

Callers that only need one step should use the calculators directly; this
facade exists so that a UI page or exporter can obtain everything from one
call with settings resolved once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from config.settings import Settings, load_settings
from core.emissions import calculate_portfolio_emissions
from core.financial import compare_scenarios
from core.models import BaselineAssumptions, Emissions, Scenario, ScenarioResult, Site, default_assumptions
from core.simulator import simulate_scenario

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortfolioAnalysis:
    baseline: Emissions
    site_emissions: dict[str, Emissions]
    scenario_results: dict[str, ScenarioResult]
    comparison: list[dict]
    settings: Settings


def analyse_portfolio(
    sites: Iterable[Site],
    scenarios: Iterable[Scenario],
    assumptions: Optional[BaselineAssumptions] = None,
    settings: Optional[Settings] = None,
) -> PortfolioAnalysis:
    sites = list(sites)
    scenarios = list(scenarios)
    assumptions = assumptions or default_assumptions()
    settings = settings or load_settings()

    baseline, site_emissions = calculate_portfolio_emissions(sites, assumptions)
    results = {
        s.id: simulate_scenario(s, sites, assumptions, settings.sbti_tolerance)
        for s in scenarios
    }
    comparison = compare_scenarios(
        scenarios, sites, assumptions,
        discount_rate=settings.discount_rate,
        tolerance=settings.sbti_tolerance,
        results=results,
    )
    logger.info(
        "Analysed %d sites and %d scenarios (baseline %.1f tCO2e)",
        len(sites), len(scenarios), baseline.total,
    )
    return PortfolioAnalysis(
        baseline=baseline,
        site_emissions=site_emissions,
        scenario_results=results,
        comparison=comparison,
        settings=settings,
    )
