# ═══════════════════════════════════════════════════════════════════════════════
# Portfolio Decarbonisation Engine — Scenario Simulator
# © 2026 Aparajita Parihar. All rights reserved.
#
# Walks a scenario year by year from baseline_year to target_year inclusive.
# Each year:
#   1. interventions whose implementation_year equals the year are applied,
#      portfolio-wide, to a per-site SiteState (never to the Site itself)
#   2. emissions are recomputed from the mutated state
#
# Causal order inside a year's emissions:
#   efficiency lowers demand → solar displaces demand → PPA covers what is
#   left, capped so that solar + PPA never exceed demand.
#
# Known limitation: Scope 1 is held at each site's baseline for every year.
# Fuel-switch interventions are accepted but have no modelled effect.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from config.constants import KG_PER_TONNE, PPA_MAX_PERCENT, SBTI_TOLERANCE, SOLAR_YIELD_KWH_PER_KW
from core.emissions import calculate_site_emissions, resolve_annual_kwh, resolve_grid_factor
from core.models import (
    BaselineAssumptions,
    Emissions,
    Intervention,
    InterventionCategory,
    Scenario,
    ScenarioResult,
    Site,
)
from core.trajectory import calculate_sbti_trajectory, check_sbti_compliance

logger = logging.getLogger(__name__)


@dataclass
class SiteState:
    """Mutable per-site simulation state; rebuilt for every simulate_scenario call."""

    site_id: str
    area_sq_ft: float
    grid_factor: float
    baseline_scope1: float
    current_kwh: float
    solar_kw: float = 0.0
    ppa_percent: float = 0.0
    embodied_reduction_percent: float = 0.0

    def displacement(self) -> tuple[float, float, float]:
        """Return (solar_kwh, ppa_kwh, grid_kwh) for the current state."""
        demand = self.current_kwh
        solar = min(self.solar_kw * SOLAR_YIELD_KWH_PER_KW, demand)
        ppa = min(demand * self.ppa_percent / 100.0, demand - solar)
        grid = max(0.0, demand - solar - ppa)
        return solar, ppa, grid

    def grid_kwh(self) -> float:
        return self.displacement()[2]


def build_site_states(
    sites: Iterable[Site],
    assumptions: BaselineAssumptions,
) -> tuple[dict[str, SiteState], float]:
    """Fresh state map plus the portfolio baseline total (tCO₂e)."""
    states: dict[str, SiteState] = {}
    baseline_total = 0.0
    for site in sites:
        emissions, _ = calculate_site_emissions(site, assumptions)
        baseline_total += emissions.total
        states[site.id] = SiteState(
            site_id=site.id,
            area_sq_ft=float(site.area_sq_ft or 0.0),
            grid_factor=resolve_grid_factor(site, assumptions),
            baseline_scope1=emissions.scope1,
            current_kwh=resolve_annual_kwh(site),
            solar_kw=float(site.solar_installed_kw or 0.0),
        )
    return states, baseline_total


# ─────────────────────────────────────────────────────────────────────────────
# INTERVENTION EFFECTS — one handler per category
# ─────────────────────────────────────────────────────────────────────────────

def _apply_efficiency(state: SiteState, intervention: Intervention) -> None:
    # Compounds on the already-reduced demand, not on the baseline.
    if intervention.energy_savings_percent:
        state.current_kwh -= state.current_kwh * intervention.energy_savings_percent / 100.0


def _apply_renewables(state: SiteState, intervention: Intervention) -> None:
    if intervention.solar_kw_to_install:
        state.solar_kw += intervention.solar_kw_to_install
    if intervention.ppa_percent_of_load:
        state.ppa_percent = min(PPA_MAX_PERCENT, state.ppa_percent + intervention.ppa_percent_of_load)


def _apply_embodied(state: SiteState, intervention: Intervention) -> None:
    if intervention.embodied_reduction_percent:
        state.embodied_reduction_percent = intervention.embodied_reduction_percent


def _no_operational_effect(state: SiteState, intervention: Intervention) -> None:
    return None


_HANDLERS: dict[InterventionCategory, Callable[[SiteState, Intervention], None]] = {
    InterventionCategory.EFFICIENCY:  _apply_efficiency,
    InterventionCategory.RENEWABLES:  _apply_renewables,
    InterventionCategory.FUEL_SWITCH: _no_operational_effect,
    InterventionCategory.EMBODIED:    _apply_embodied,
    InterventionCategory.OTHER:       _no_operational_effect,
}


def _assert_handler_coverage() -> None:
    missing = set(InterventionCategory) - set(_HANDLERS)
    assert not missing, (
        f"core/simulator.py integrity error: no handler for categories {sorted(c.value for c in missing)}"
    )


_assert_handler_coverage()


def apply_intervention(states: dict[str, SiteState], intervention: Intervention) -> float:
    """
    Apply one intervention to every site state.

    Returns the tCO₂e avoided in the year of application: the drop in
    grid-sourced kWh it causes, times each site's grid factor.
    """
    handler = _HANDLERS[intervention.category]
    avoided_kg = 0.0
    for state in states.values():
        before = state.grid_kwh()
        handler(state, intervention)
        avoided_kg += (before - state.grid_kwh()) * state.grid_factor
    if handler is _no_operational_effect:
        logger.debug(
            "Intervention %s (%s) has no modelled operational effect",
            intervention.id, intervention.category.value,
        )
    return avoided_kg / KG_PER_TONNE


def portfolio_emissions_from_states(states: Iterable[SiteState]) -> Emissions:
    """Portfolio record for one simulated year (ratios of sums for EUI / RE %)."""
    scope1 = scope2 = 0.0
    total_area = total_kwh = renewable_kwh = 0.0
    for state in states:
        solar, ppa, grid = state.displacement()
        scope1 += state.baseline_scope1
        scope2 += grid * state.grid_factor / KG_PER_TONNE
        total_area += state.area_sq_ft
        total_kwh += state.current_kwh
        renewable_kwh += solar + ppa
    return Emissions(
        scope1=scope1,
        scope2_location_based=scope2,
        scope2_market_based=scope2,
        scope3=0.0,
        eui=total_kwh / total_area if total_area > 0 else 0.0,
        renewable_percent=renewable_kwh / total_kwh * 100.0 if total_kwh > 0 else 0.0,
    )


# ─────────────────────────────────────────────────────────────────────────────
# PUBLIC ENTRY POINT
# ─────────────────────────────────────────────────────────────────────────────

def simulate_scenario(
    scenario: Scenario,
    sites: Iterable[Site],
    assumptions: BaselineAssumptions,
    tolerance: float = SBTI_TOLERANCE,
) -> ScenarioResult:
    """
    Project portfolio emissions year by year under a scenario's interventions.

    The target trajectory runs from the baseline portfolio total to
    ``long_term_target_2040_percent`` reduction at ``target_year``, and
    compliance is checked against every simulated year.

    Identical inputs always produce identical results; no state survives
    between calls.
    """
    if scenario.target_year < scenario.baseline_year:
        raise ValueError(
            f"Scenario {scenario.id!r}: target_year ({scenario.target_year}) "
            f"must not precede baseline_year ({scenario.baseline_year})."
        )

    states, baseline_total = build_site_states(sites, assumptions)
    yearly_emissions: dict[int, Emissions] = {}
    impact: dict[str, float] = {}

    for year in scenario.years:
        for intervention in scenario.interventions:
            if intervention.implementation_year != year:
                continue
            avoided = apply_intervention(states, intervention)
            impact[intervention.id] = impact.get(intervention.id, 0.0) + avoided
            logger.debug("%d: applied %s, %.2f tCO2e avoided", year, intervention.id, avoided)
        yearly_emissions[year] = portfolio_emissions_from_states(states.values())

    trajectory = calculate_sbti_trajectory(
        scenario.baseline_year,
        baseline_total,
        scenario.target_year,
        scenario.long_term_target_2040_percent,
    )
    compliant = check_sbti_compliance(
        {year: e.total for year, e in yearly_emissions.items()},
        trajectory,
        tolerance,
    )
    logger.info(
        "Simulated %r over %d years across %d sites: SBTi %s",
        scenario.id, len(yearly_emissions), len(states),
        "compliant" if compliant else "not compliant",
    )
    return ScenarioResult(
        scenario_id=scenario.id,
        yearly_emissions=yearly_emissions,
        sbti_compliant=compliant,
        intervention_impact=impact,
        target_trajectory=trajectory,
        baseline_total=baseline_total,
        embodied_reduction_percent={
            site_id: state.embodied_reduction_percent for site_id, state in states.items()
        },
    )
