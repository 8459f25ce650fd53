# ═══════════════════════════════════════════════════════════════════════════════
# Portfolio Decarbonisation Engine — Emissions Calculator
# © 2026 Aparajita Parihar. All rights reserved.
#
# Covers:
#   • Emission-factor primitives (electricity, fuel, refrigerant, embodied,
#     commuting)
#   • Site baseline: Scope 1 & 2 snapshot for a single site
#   • Portfolio roll-up: area- and energy-weighted intensity metrics
#
# Methodology: GHG Protocol Corporate Standard. Scope 2 is location-based;
# the market-based variant equals it at snapshot level because contractual
# instruments (PPAs) are only modelled in core/simulator.py.
#
# DISCLAIMER: Results are indicative only. Not a verified GHG inventory.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from config.constants import (
    DEFAULT_REFRIGERANT_LEAKAGE_PERCENT,
    KG_PER_TONNE,
    SOLAR_YIELD_KWH_PER_KW,
)
from core.models import BaselineAssumptions, Emissions, EmissionsBySource, Site

logger = logging.getLogger(__name__)


def _num(value: Optional[float]) -> float:
    """Treat an absent optional quantity as zero."""
    return float(value) if value is not None else 0.0


# ─────────────────────────────────────────────────────────────────────────────
# EMISSION-FACTOR PRIMITIVES — all return kgCO₂e unless stated
# ─────────────────────────────────────────────────────────────────────────────

def electricity_emissions(kwh: float, factor: float) -> float:
    """kgCO₂e = kWh × grid factor (kgCO₂e/kWh)."""
    return _num(kwh) * _num(factor)


def fuel_emissions(liters: float, density: float, factor: float) -> float:
    """kgCO₂e = litres × density (kg/L) × emission factor (kgCO₂e/kg)."""
    return _num(liters) * _num(density) * _num(factor)


def refrigerant_emissions(
    kg_charge: float,
    gwp: float,
    leakage_percent: Optional[float] = DEFAULT_REFRIGERANT_LEAKAGE_PERCENT,
) -> float:
    """
    Annual fugitive emissions from a refrigerant charge.

    kgCO₂e = charge (kg) × leakage % / 100 × GWP.  Models routine leakage
    only, not end-of-life release of the full charge.  A leakage of None
    means "not recorded" and uses the default rate.
    """
    if leakage_percent is None:
        leakage_percent = DEFAULT_REFRIGERANT_LEAKAGE_PERCENT
    return _num(kg_charge) * (_num(leakage_percent) / 100.0) * _num(gwp)


def embodied_carbon(materials: Iterable) -> float:
    """
    Σ mass × carbon factor over a bill of materials.

    Each item is either a ``(mass, factor)`` pair or a mapping with
    ``mass`` and ``carbon_factor`` keys. Negative factors (timber) reduce
    the total and may drive it below zero.
    """
    total = 0.0
    for item in materials:
        if isinstance(item, Mapping):
            mass, factor = item.get("mass"), item.get("carbon_factor")
        else:
            mass, factor = item
        total += _num(mass) * _num(factor)
    return total


def commuting_emissions(trips: Iterable, factors: Mapping[str, float]) -> float:
    """
    Tenant commuting emissions in **tCO₂e**.

    ``trips`` holds ``(mode, person_km)`` pairs or mappings with ``mode`` and
    ``person_km`` keys. Modes missing from ``factors`` contribute nothing.
    """
    total_kg = 0.0
    for trip in trips:
        if isinstance(trip, Mapping):
            mode, person_km = trip.get("mode"), trip.get("person_km")
        else:
            mode, person_km = trip
        total_kg += _num(person_km) * _num(factors.get(mode, 0.0))
    return total_kg / KG_PER_TONNE


# ─────────────────────────────────────────────────────────────────────────────
# SITE INPUT RESOLUTION
# ─────────────────────────────────────────────────────────────────────────────

def resolve_grid_factor(site: Site, assumptions: BaselineAssumptions) -> float:
    if site.state not in assumptions.grid_factors:
        logger.debug("Site %s: no grid factor for %r, using default", site.id, site.state)
    return assumptions.grid_factor_for(site.state)


def _warn_if_negative(site: Site, *fields: str) -> None:
    """Negative quantities are used as given but flagged."""
    for name in fields:
        value = getattr(site, name)
        if value is not None and value < 0:
            logger.warning("Site %s: negative %s (%s) used as recorded", site.id, name, value)


def resolve_annual_kwh(site: Site) -> float:
    """Measured consumption if recorded, else benchmark EUI × area, else 0."""
    _warn_if_negative(site, "measured_kwh", "benchmark_eui", "area_sq_ft")
    if site.measured_kwh:
        return float(site.measured_kwh)
    if site.benchmark_eui:
        return float(site.benchmark_eui) * _num(site.area_sq_ft)
    return 0.0


def resolve_refrigerant_gwp(site: Site, assumptions: BaselineAssumptions) -> float:
    """Site-declared GWP, else the table value for its refrigerant type, else 0."""
    if site.refrigerant_gwp:
        return float(site.refrigerant_gwp)
    if site.refrigerant_type and site.refrigerant_type in assumptions.refrigerant_gwps:
        return float(assumptions.refrigerant_gwps[site.refrigerant_type])
    return 0.0


def solar_generation_kwh(solar_kw: Optional[float]) -> float:
    return _num(solar_kw) * SOLAR_YIELD_KWH_PER_KW


def scope1_kg_by_source(site: Site, assumptions: BaselineAssumptions) -> dict[str, float]:
    """Direct emissions per source (kgCO₂e); absent inputs contribute 0."""
    _warn_if_negative(site, "diesel_liters_per_year", "lpg_kg_per_year", "refrigerant_kg")
    diesel = fuel_emissions(
        site.diesel_liters_per_year,
        assumptions.diesel_density,
        assumptions.diesel_emission_factor,
    ) if site.diesel_liters_per_year else 0.0
    lpg = _num(site.lpg_kg_per_year) * assumptions.lpg_emission_factor
    gwp = resolve_refrigerant_gwp(site, assumptions)
    refrigerants = refrigerant_emissions(
        site.refrigerant_kg, gwp, site.refrigerant_leakage_percent,
    ) if site.refrigerant_kg and gwp else 0.0
    return {"diesel": diesel, "lpg": lpg, "refrigerants": refrigerants}


# ─────────────────────────────────────────────────────────────────────────────
# SITE BASELINE
# ─────────────────────────────────────────────────────────────────────────────

def calculate_site_emissions(
    site: Site,
    assumptions: BaselineAssumptions,
) -> tuple[Emissions, EmissionsBySource]:
    """
    Baseline Scope 1/2/3 snapshot for a single site.

    Returns ``(emissions, breakdown)`` where both are in tCO₂e.
    Scope 3 is always 0 here: commuting and embodied carbon are computed by
    their own calculators and folded in by the caller.

    Renewable % is solar generation over consumption and is NOT clamped:
    an oversized array reports more than 100 %.
    """
    grid_factor = resolve_grid_factor(site, assumptions)
    annual_kwh = resolve_annual_kwh(site)
    area = _num(site.area_sq_ft)

    electricity_kg = electricity_emissions(annual_kwh, grid_factor)
    scope1_kg = scope1_kg_by_source(site, assumptions)

    scope1 = sum(scope1_kg.values()) / KG_PER_TONNE
    scope2 = electricity_kg / KG_PER_TONNE

    solar_kwh = solar_generation_kwh(site.solar_installed_kw)
    emissions = Emissions(
        scope1=scope1,
        scope2_location_based=scope2,
        scope2_market_based=scope2,
        scope3=0.0,
        eui=annual_kwh / area if area > 0 else 0.0,
        renewable_percent=solar_kwh / annual_kwh * 100.0 if annual_kwh > 0 else 0.0,
    )
    breakdown = EmissionsBySource(
        electricity=scope2,
        diesel=scope1_kg["diesel"] / KG_PER_TONNE,
        lpg=scope1_kg["lpg"] / KG_PER_TONNE,
        refrigerants=scope1_kg["refrigerants"] / KG_PER_TONNE,
    )
    return emissions, breakdown


# ─────────────────────────────────────────────────────────────────────────────
# PORTFOLIO ROLL-UP
# ─────────────────────────────────────────────────────────────────────────────

def calculate_portfolio_emissions(
    sites: Iterable[Site],
    assumptions: BaselineAssumptions,
) -> tuple[Emissions, dict[str, Emissions]]:
    """
    Sum site baselines into portfolio totals.

    EUI and renewable % are ratios of summed absolute quantities
    (Σ kWh / Σ area, Σ solar kWh / Σ kWh), never averages of site ratios.

    Returns ``(portfolio_emissions, {site_id: site_emissions})``.
    """
    site_emissions: dict[str, Emissions] = {}
    scope1 = scope2_lb = scope2_mb = scope3 = 0.0
    total_area = total_kwh = total_solar_kwh = 0.0

    for site in sites:
        emissions, _ = calculate_site_emissions(site, assumptions)
        site_emissions[site.id] = emissions

        scope1 += emissions.scope1
        scope2_lb += emissions.scope2_location_based
        scope2_mb += emissions.scope2_market_based
        scope3 += emissions.scope3

        total_area += _num(site.area_sq_ft)
        total_kwh += resolve_annual_kwh(site)
        total_solar_kwh += solar_generation_kwh(site.solar_installed_kw)

    portfolio = Emissions(
        scope1=scope1,
        scope2_location_based=scope2_lb,
        scope2_market_based=scope2_mb,
        scope3=scope3,
        eui=total_kwh / total_area if total_area > 0 else 0.0,
        renewable_percent=total_solar_kwh / total_kwh * 100.0 if total_kwh > 0 else 0.0,
    )
    logger.debug(
        "Portfolio of %d sites: %.1f tCO2e, EUI %.2f kWh/sqft",
        len(site_emissions), portfolio.total, portfolio.eui,
    )
    return portfolio, site_emissions
