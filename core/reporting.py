# ═══════════════════════════════════════════════════════════════════════════════
# Portfolio Decarbonisation Engine — Tabular Result Views
# © 2026 Aparajita Parihar. All rights reserved.
#
# pandas DataFrame views over engine results for dashboards and exporters.
# Nothing here writes files; serialisation belongs to the caller.
#
# This is the ONLY engine module that imports pandas; the calculators stay
# importable without it.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from typing import Iterable, Mapping

import pandas as pd

from config.constants import DEFAULT_DISCOUNT_RATE, SBTI_TOLERANCE
from core.financial import calculate_intervention_financials
from core.models import Emissions, Intervention, ScenarioResult
from core.trajectory import sbti_compliance_report

_EMISSION_COLUMNS = [
    "scope1", "scope2_location_based", "scope2_market_based", "scope3",
    "total", "total_market_based", "eui", "renewable_percent",
]


def yearly_emissions_frame(result: ScenarioResult, tolerance: float = SBTI_TOLERANCE) -> pd.DataFrame:
    """One row per simulated year with the SBTi target and limit alongside."""
    rows = [{"year": year, **e.to_dict()} for year, e in sorted(result.yearly_emissions.items())]
    df = pd.DataFrame(rows, columns=["year"] + _EMISSION_COLUMNS).set_index("year")

    report = pd.DataFrame(
        sbti_compliance_report(result.totals_by_year(), result.target_trajectory, tolerance),
        columns=["year", "target", "limit", "compliant"],
    ).set_index("year")
    df = df.join(report, how="left")
    df = df.rename(columns={"compliant": "within_tolerance"})
    return df


def site_emissions_frame(site_emissions: Mapping[str, Emissions]) -> pd.DataFrame:
    rows = [{"site_id": site_id, **e.to_dict()} for site_id, e in site_emissions.items()]
    return pd.DataFrame(rows, columns=["site_id"] + _EMISSION_COLUMNS).set_index("site_id")


def comparison_frame(rows: Iterable[dict]) -> pd.DataFrame:
    """compare_scenarios() output indexed by rank."""
    df = pd.DataFrame(list(rows))
    if df.empty:
        return df
    return df.set_index("rank").sort_index()


def financials_frame(
    interventions: Iterable[Intervention],
    discount_rate: float = DEFAULT_DISCOUNT_RATE,
) -> pd.DataFrame:
    rows = []
    for iv in interventions:
        fin = calculate_intervention_financials(iv, discount_rate)
        rows.append({
            "intervention_id":     iv.id,
            "name":                iv.name,
            "category":            iv.category.value,
            "implementation_year": iv.implementation_year,
            "capex":               iv.capex,
            "net_annual":          iv.savings_annual - iv.opex_annual,
            "npv":                 fin["npv"],
            "payback_years":       fin["payback_years"],
            "roi":                 fin["roi"],
            "irr":                 fin["irr"],
        })
    return pd.DataFrame(rows)
