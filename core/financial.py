# ═══════════════════════════════════════════════════════════════════════════════
# Portfolio Decarbonisation Engine — Financial Metrics & Scenario Comparator
# © 2026 Aparajita Parihar. All rights reserved.
#
# Per intervention: simple payback, NPV, ROI and IRR on a level annual net
# cash flow (savings − opex) over the intervention lifespan.
#
# Across scenarios: simulate each one, read emissions at the 2030 / 2040
# checkpoints, express them against one shared portfolio baseline and rank.
#
# "No payback", "no ROI" and "no IRR" are reported as None, never as
# infinity or NaN.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

import numpy as np

from config.constants import (
    DEFAULT_DISCOUNT_RATE,
    DEFAULT_LIFESPAN_YEARS,
    LONG_TERM_CHECKPOINT_YEAR,
    NEAR_TERM_CHECKPOINT_YEAR,
    SBTI_TOLERANCE,
)
from core.emissions import calculate_portfolio_emissions
from core.models import BaselineAssumptions, Intervention, Scenario, ScenarioResult, Site
from core.simulator import simulate_scenario

logger = logging.getLogger(__name__)


def _irr(cash_flows: list) -> Optional[float]:
    """
    Newton-Raphson IRR solver using the same cash flows as NPV.
    Returns IRR as a decimal (e.g. 0.18 = 18%), or None if no valid solution.
    """
    rate = 0.1  # initial guess: 10%
    for _ in range(1000):
        npv = sum(cf / (1.0 + rate) ** t for t, cf in enumerate(cash_flows))
        d_npv = sum(-t * cf / (1.0 + rate) ** (t + 1) for t, cf in enumerate(cash_flows))
        if d_npv == 0:
            break
        new_rate = rate - npv / d_npv
        if not -1.0 < new_rate < 100.0:
            break
        if abs(new_rate - rate) < 1e-8:
            # Guard: reject economically unreasonable values
            return new_rate if -1.0 < new_rate < 100.0 else None
        rate = new_rate
    return None


def net_annual_cashflow(intervention: Intervention) -> float:
    return float(intervention.savings_annual or 0.0) - float(intervention.opex_annual or 0.0)


def calculate_intervention_financials(
    intervention: Intervention,
    discount_rate: float = DEFAULT_DISCOUNT_RATE,
) -> dict:
    """
    Financial case for one intervention.

    Returns a dict with keys:
      npv           : float        — −capex + Σ net / (1 + r)^t, t = 1..lifespan
      payback_years : float | None — capex / net; None when net <= 0 (no payback)
      roi           : float | None — (net × lifespan − capex) / capex × 100;
                                     None when capex is 0
      irr           : float | None — internal rate of return (decimal)
    """
    capex = float(intervention.capex or 0.0)
    net = net_annual_cashflow(intervention)
    lifespan = int(intervention.lifespan_years or DEFAULT_LIFESPAN_YEARS)

    discount_factors = (1.0 + discount_rate) ** -np.arange(1, lifespan + 1, dtype=float)
    npv = -capex + float(net * discount_factors.sum())

    payback = capex / net if net > 0 else None
    roi = (net * lifespan - capex) / capex * 100.0 if capex > 0 else None
    irr = _irr([-capex] + [net] * lifespan) if capex > 0 and net > 0 else None

    return {
        "npv":           npv,
        "payback_years": payback,
        "roi":           roi,
        "irr":           irr,
    }


# ─────────────────────────────────────────────────────────────────────────────
# SCENARIO COMPARATOR
# ─────────────────────────────────────────────────────────────────────────────

def _reduction_percent(baseline: float, value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    if baseline <= 0:
        return 0.0
    return (baseline - value) / baseline * 100.0


def _rank_key(row: dict) -> tuple:
    # Compliant first, then deepest 2040 then 2030 reduction; None sorts last.
    def desc(value: Optional[float]) -> tuple:
        return (value is None, -(value or 0.0))
    return (not row["sbti_compliant"],) + desc(row["reduction_percent_2040"]) + desc(row["reduction_percent_2030"])


def compare_scenarios(
    scenarios: Iterable[Scenario],
    sites: Iterable[Site],
    assumptions: BaselineAssumptions,
    discount_rate: float = DEFAULT_DISCOUNT_RATE,
    tolerance: float = SBTI_TOLERANCE,
    results: Optional[Mapping[str, ScenarioResult]] = None,
) -> list[dict]:
    """
    Simulate every scenario and rank them.

    All reductions are measured against the same portfolio baseline total.
    A checkpoint year outside a scenario's horizon reports None for both its
    emissions and its reduction.

    ``results`` may carry simulate_scenario() outputs keyed by scenario id;
    scenarios found there are not simulated again.

    Returns rows ordered best-first, each with keys:
      scenario_id, name, total_emissions_2030, total_emissions_2040,
      reduction_percent_2030, reduction_percent_2040, sbti_compliant,
      total_capex, total_npv, rank
    """
    sites = list(sites)
    baseline, _ = calculate_portfolio_emissions(sites, assumptions)
    baseline_total = baseline.total

    rows = []
    for scenario in scenarios:
        result = (results or {}).get(scenario.id)
        if result is None:
            result = simulate_scenario(scenario, sites, assumptions, tolerance)
        near = result.yearly_emissions.get(NEAR_TERM_CHECKPOINT_YEAR)
        far = result.yearly_emissions.get(LONG_TERM_CHECKPOINT_YEAR)
        near_total = near.total if near is not None else None
        far_total = far.total if far is not None else None

        total_capex = sum(float(i.capex or 0.0) for i in scenario.interventions)
        total_npv = sum(
            calculate_intervention_financials(i, discount_rate)["npv"]
            for i in scenario.interventions
        )
        rows.append({
            "scenario_id":            scenario.id,
            "name":                   scenario.name,
            "total_emissions_2030":   near_total,
            "total_emissions_2040":   far_total,
            "reduction_percent_2030": _reduction_percent(baseline_total, near_total),
            "reduction_percent_2040": _reduction_percent(baseline_total, far_total),
            "sbti_compliant":         result.sbti_compliant,
            "total_capex":            total_capex,
            "total_npv":              total_npv,
        })

    rows.sort(key=_rank_key)
    for position, row in enumerate(rows, start=1):
        row["rank"] = position
    logger.info("Compared %d scenarios against baseline %.1f tCO2e", len(rows), baseline_total)
    return rows
