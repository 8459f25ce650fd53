# ═══════════════════════════════════════════════════════════════════════════════
# Portfolio Decarbonisation Engine — Baseline Assumptions Registry
# © 2026 Aparajita Parihar. All rights reserved.
#
# Single source of truth for:
#   • DEFAULT_GRID_FACTORS       — state grid emission factors (Scope 2)
#   • DEFAULT_EUI_BENCHMARKS     — fallback energy-use intensity by city tier
#   • DEFAULT_REFRIGERANT_GWPS   — 100-year GWPs by refrigerant type
#   • DEFAULT_EMBODIED_FACTORS   — cradle-to-gate factors by material
#   • DEFAULT_ASSUMPTIONS        — the combined record used when a caller
#                                  supplies no assumptions of its own
#
# Sourced from:
#   CEA CO2 Baseline Database v19 (state averages, rounded)
#   IPCC AR5 GWP-100 values
#   ICE Database v3 (embodied factors, rounded)
#
# This file has ZERO third-party and ZERO network imports.
# Build a typed record with core.models.default_assumptions().
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

# ─────────────────────────────────────────────────────────────────────────────
# GRID EMISSION FACTORS — kgCO₂e / kWh
# 'default' is mandatory: sites in an unlisted state fall back to it.
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_GRID_FACTORS: dict[str, float] = {
    "Delhi":         0.82,
    "Maharashtra":   0.85,
    "Karnataka":     0.75,
    "Tamil Nadu":    0.78,
    "Telangana":     0.90,
    "Gujarat":       0.88,
    "West Bengal":   0.95,
    "Uttar Pradesh": 0.87,
    "Rajasthan":     0.84,
    "Punjab":        0.81,
    "Haryana":       0.83,
    "Kerala":        0.72,
    "default":       0.82,
}


# ─────────────────────────────────────────────────────────────────────────────
# EUI BENCHMARKS — kWh / sqft / year, by city tier
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_EUI_BENCHMARKS: dict[str, float] = {
    "metro":   15.0,
    "tier1":   12.0,
    "tier2":   10.0,
    "default": 13.0,
}


# ─────────────────────────────────────────────────────────────────────────────
# REFRIGERANT GWPs — IPCC AR5, 100-year horizon
# No fallback row: an unlisted type with no site GWP is excluded and
# reported as a data gap.
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_REFRIGERANT_GWPS: dict[str, float] = {
    "R-410A":  2088,
    "R-32":     675,
    "R-134a":  1430,
    "R-407C":  1774,
    "R-22":    1810,
}


# ─────────────────────────────────────────────────────────────────────────────
# EMBODIED CARBON FACTORS — kgCO₂e / kg
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_EMBODIED_FACTORS: dict[str, float] = {
    "concrete":  0.15,
    "steel":     2.5,
    "glass":     0.85,
    "aluminum":  8.0,
    "timber":   -0.5,   # biogenic sequestration
}


# ─────────────────────────────────────────────────────────────────────────────
# COMBINED DEFAULTS
# Keys mirror the field names of core.models.BaselineAssumptions.
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_ASSUMPTIONS: dict = {
    "fiscal_year":            2025,
    "grid_factors":           DEFAULT_GRID_FACTORS,
    "eui_benchmarks":         DEFAULT_EUI_BENCHMARKS,
    "diesel_density":         0.832,   # kg / litre
    "diesel_emission_factor": 2.68,    # kgCO₂e / kg
    "lpg_emission_factor":    3.0,     # kgCO₂e / kg
    "refrigerant_gwps":       DEFAULT_REFRIGERANT_GWPS,
    "embodied_factors":       DEFAULT_EMBODIED_FACTORS,
}


# ─────────────────────────────────────────────────────────────────────────────
# INTEGRITY ASSERTION (runs at import time — zero cost in production)
# Raises AssertionError immediately if a lookup table loses its fallback row.
# ─────────────────────────────────────────────────────────────────────────────

def _assert_registry_integrity() -> None:
    for label, table in (
        ("DEFAULT_GRID_FACTORS", DEFAULT_GRID_FACTORS),
        ("DEFAULT_EUI_BENCHMARKS", DEFAULT_EUI_BENCHMARKS),
    ):
        assert "default" in table, (
            f"config/assumptions.py integrity error: "
            f"{label} is missing its 'default' entry"
        )
    for state, factor in DEFAULT_GRID_FACTORS.items():
        assert factor > 0, (
            f"config/assumptions.py integrity error: "
            f"grid factor for '{state}' must be positive"
        )


_assert_registry_integrity()
