# ═══════════════════════════════════════════════════════════════════════════════
# Portfolio Decarbonisation Engine — Input Validation & Data Gaps
# © 2026 Aparajita Parihar. All rights reserved.
#
# Validation helpers return (ok, message) and never raise; the calculators
# degrade gracefully on missing data, so these exist to tell the caller
# WHICH figures are estimates and how to firm them up.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from core.models import BaselineAssumptions, Site

SEVERITY_ORDER = {"high": 0, "medium": 1, "low": 2}


# ─────────────────────────────────────────────────────────────────────────────
# VALIDATION HELPERS
# ─────────────────────────────────────────────────────────────────────────────

def validate_energy_kwh(kwh: float, label: str = "Energy") -> tuple[bool, str]:
    """Validate an annual energy consumption figure (kWh)."""
    if not isinstance(kwh, (int, float)):
        return False, f"{label} must be a number."
    if kwh < 0:
        return False, f"{label} cannot be negative."
    if kwh > 1_000_000_000:
        return False, f"{label} value ({kwh:,.0f} kWh) is unrealistically large — please check."
    return True, "ok"


def validate_floor_area(area_sq_ft: float) -> tuple[bool, str]:
    """Validate a floor area in sqft."""
    if not isinstance(area_sq_ft, (int, float)):
        return False, "Floor area must be a number."
    if area_sq_ft <= 0:
        return False, "Floor area must be greater than zero."
    if area_sq_ft > 50_000_000:
        return False, f"Floor area ({area_sq_ft:,.0f} sqft) is unrealistically large."
    return True, "ok"


def validate_percent(value: float, label: str = "Percentage") -> tuple[bool, str]:
    """Validate a 0–100 percentage."""
    if not isinstance(value, (int, float)):
        return False, f"{label} must be a number."
    if not 0 <= value <= 100:
        return False, f"{label} ({value}) must be between 0 and 100."
    return True, "ok"


# ─────────────────────────────────────────────────────────────────────────────
# DATA-GAP ANALYSIS
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class DataGap:
    site_id: str
    site_name: str
    gaps: list[dict] = field(default_factory=list)

    def add(self, category: str, field_name: str, severity: str, recommendation: str) -> None:
        self.gaps.append({
            "category":       category,
            "field":          field_name,
            "severity":       severity,
            "recommendation": recommendation,
        })

    @property
    def worst_severity(self) -> str | None:
        if not self.gaps:
            return None
        return min((g["severity"] for g in self.gaps), key=SEVERITY_ORDER.__getitem__)


def identify_data_gaps(site: Site, assumptions: BaselineAssumptions) -> DataGap:
    """List the missing or suspect inputs behind one site's baseline."""
    gap = DataGap(site_id=site.id, site_name=site.name)

    ok, msg = validate_floor_area(site.area_sq_ft)
    if not ok:
        gap.add("Building", "area_sq_ft", "high", f"{msg} EUI is reported as 0 until corrected.")

    if not site.measured_kwh:
        if site.benchmark_eui:
            gap.add(
                "Energy", "measured_kwh", "medium",
                "Electricity is estimated from the benchmark EUI; upload 12 months of utility bills.",
            )
        else:
            tier_eui = assumptions.eui_benchmarks.get("default")
            hint = f" (portfolio default benchmark: {tier_eui} kWh/sqft/yr)" if tier_eui else ""
            gap.add(
                "Energy", "measured_kwh", "high",
                f"No metered or benchmark electricity data; Scope 2 is reported as 0{hint}.",
            )
    else:
        ok, msg = validate_energy_kwh(site.measured_kwh, "Measured electricity")
        if not ok:
            gap.add("Energy", "measured_kwh", "high", msg)

    if site.state not in assumptions.grid_factors:
        gap.add(
            "Energy", "state", "low",
            f"No grid factor for {site.state!r}; the default factor is applied.",
        )

    if site.refrigerant_kg and not site.refrigerant_gwp:
        if site.refrigerant_type in assumptions.refrigerant_gwps:
            gap.add(
                "Refrigerants", "refrigerant_gwp", "low",
                f"GWP taken from the {site.refrigerant_type} table value; confirm against nameplate.",
            )
        else:
            gap.add(
                "Refrigerants", "refrigerant_gwp", "medium",
                "Refrigerant charge recorded without a GWP or known type; fugitive emissions are excluded.",
            )
    elif not site.refrigerant_kg:
        gap.add(
            "Refrigerants", "refrigerant_kg", "medium",
            "No refrigerant charge recorded; collect HVAC service logs for fugitive emissions.",
        )

    ok, msg = validate_percent(site.refrigerant_leakage_percent, "Refrigerant leakage")
    if not ok:
        gap.add("Refrigerants", "refrigerant_leakage_percent", "medium", msg)

    if site.diesel_liters_per_year is None:
        gap.add(
            "Fuel", "diesel_liters_per_year", "low",
            "No DG diesel consumption recorded; confirm whether the site runs backup generators.",
        )

    if not site.has_tenant_metering:
        gap.add(
            "Energy", "has_tenant_metering", "low",
            "No tenant sub-metering; tenant and landlord loads cannot be separated.",
        )

    gap.gaps.sort(key=lambda g: SEVERITY_ORDER[g["severity"]])
    return gap


def portfolio_data_gaps(sites: Iterable[Site], assumptions: BaselineAssumptions) -> list[DataGap]:
    """Data gaps for every site that has at least one, worst first."""
    gaps = [identify_data_gaps(site, assumptions) for site in sites]
    gaps = [g for g in gaps if g.gaps]
    gaps.sort(key=lambda g: SEVERITY_ORDER[g.worst_severity])
    return gaps
