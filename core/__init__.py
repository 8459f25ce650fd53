"""
Emissions calculation and scenario-simulation engine.

The public function-call surface used by UI pages, exporters and the
persistence layer is re-exported here. core.reporting (pandas views) is
deliberately not imported so that the calculators load without pandas.
"""

from core.emissions import (
    calculate_portfolio_emissions,
    calculate_site_emissions,
    commuting_emissions,
    electricity_emissions,
    embodied_carbon,
    fuel_emissions,
    refrigerant_emissions,
)
from core.financial import calculate_intervention_financials, compare_scenarios
from core.models import (
    BaselineAssumptions,
    Emissions,
    EmissionsBySource,
    Intervention,
    InterventionCategory,
    Scenario,
    ScenarioResult,
    Site,
    default_assumptions,
)
from core.simulator import simulate_scenario
from core.trajectory import calculate_sbti_trajectory, check_sbti_compliance

__all__ = [
    "BaselineAssumptions",
    "Emissions",
    "EmissionsBySource",
    "Intervention",
    "InterventionCategory",
    "Scenario",
    "ScenarioResult",
    "Site",
    "calculate_intervention_financials",
    "calculate_portfolio_emissions",
    "calculate_sbti_trajectory",
    "calculate_site_emissions",
    "check_sbti_compliance",
    "commuting_emissions",
    "compare_scenarios",
    "default_assumptions",
    "electricity_emissions",
    "embodied_carbon",
    "fuel_emissions",
    "refrigerant_emissions",
    "simulate_scenario",
]
