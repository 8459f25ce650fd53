# ═══════════════════════════════════════════════════════════════════════════════
# Portfolio Decarbonisation Engine — Canonical Constants Registry
# © 2026 Aparajita Parihar. All rights reserved.
#
# Single source of truth for all physical, financial, and target constants.
# All modules MUST import from here — never redefine constants locally.
#
# Sources:
#   GHG Protocol Corporate Standard (Scope 1/2/3 boundaries)
#   SBTi Corporate Net-Zero Standard (linear near/long-term reductions)
#   CEA CO2 Baseline Database (India grid factors, see config/assumptions.py)
#   DEFRA / BEIS conversion factors (commuting modes)
#
# This file has ZERO third-party and ZERO side-effect imports.
# It is safe to import in any context, including unit tests.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

# ─────────────────────────────────────────────────────────────────────────────
# UNIT CONVERSIONS
# ─────────────────────────────────────────────────────────────────────────────

KG_PER_TONNE: float = 1000.0


# ─────────────────────────────────────────────────────────────────────────────
# ON-SITE GENERATION & REFRIGERANTS
# ─────────────────────────────────────────────────────────────────────────────

# Annual specific yield of rooftop solar PV (Indian average irradiance)
SOLAR_YIELD_KWH_PER_KW: float = 1200.0  # kWh / kW / year

# Annual fugitive leakage of installed refrigerant charge
DEFAULT_REFRIGERANT_LEAKAGE_PERCENT: float = 10.0  # % of charge / year

# Contracted PPA share can never exceed the whole load
PPA_MAX_PERCENT: float = 100.0  # % of load


# ─────────────────────────────────────────────────────────────────────────────
# SBTi TARGETS
# ─────────────────────────────────────────────────────────────────────────────

# Headroom above the linear target before a year counts as non-compliant
SBTI_TOLERANCE: float = 0.05  # fraction of target

# Checkpoint years reported by the scenario comparator
NEAR_TERM_CHECKPOINT_YEAR: int = 2030
LONG_TERM_CHECKPOINT_YEAR: int = 2040


# ─────────────────────────────────────────────────────────────────────────────
# FINANCIAL ASSUMPTIONS
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_DISCOUNT_RATE: float = 0.08   # real discount rate
DEFAULT_LIFESPAN_YEARS: int = 10      # years, when an intervention omits one


# ─────────────────────────────────────────────────────────────────────────────
# TENANT COMMUTING — Scope 3 Category 7
# ─────────────────────────────────────────────────────────────────────────────

COMMUTE_WEEKS_PER_YEAR: int = 50  # 52 weeks less holidays

COMMUTE_EMISSION_FACTORS: dict[str, float] = {
    "car":        0.171,  # kgCO₂e / person-km
    "motorcycle": 0.103,
    "bus":        0.089,
    "metro":      0.041,
    "bike":       0.0,
    "walk":       0.0,
}


# ─────────────────────────────────────────────────────────────────────────────
# EMBODIED CARBON — fit-out material catalogue
#
# Each tuple: (category, kgCO₂e per unit, unit, typical fit-out quantity)
# Timber carries a negative factor to model biogenic sequestration.
# ─────────────────────────────────────────────────────────────────────────────

MATERIAL_CATALOGUE: list[tuple[str, float, str, float]] = [
    ("Concrete",   0.15, "kg", 50_000),
    ("Steel",      2.50, "kg", 15_000),
    ("Glass",      0.85, "kg",  8_000),
    ("Aluminum",   8.00, "kg",  2_000),
    ("Timber",    -0.50, "kg", 10_000),
    ("Drywall",    0.30, "kg", 12_000),
    ("Insulation", 1.20, "kg",  3_000),
    ("Flooring",   0.40, "m²", 10_000),
]

# Simplified freight uplift: kgCO₂e per tonne of material-kgCO₂e per 100 km
TRANSPORT_FACTOR_PER_100_KM: float = 0.05

DEFAULT_TRANSPORT_DISTANCE_KM: float = 50.0
DEFAULT_EMBODIED_BUDGET_PER_SQ_FT: float = 15.0  # kgCO₂e / sqft


# ─────────────────────────────────────────────────────────────────────────────
# PRIORITISATION MATRIX
# ─────────────────────────────────────────────────────────────────────────────

# Scores are on a 1–10 scale; at or above this counts as "high"
PRIORITY_HIGH_THRESHOLD: float = 7.0
