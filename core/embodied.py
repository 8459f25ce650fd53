# ═══════════════════════════════════════════════════════════════════════════════
# Portfolio Decarbonisation Engine — Embodied Carbon Projects
# © 2026 Aparajita Parihar. All rights reserved.
#
# Fit-out / renovation bill of materials → embodied carbon (kgCO₂e),
# intensity per sqft and a pass/fail against a carbon budget.
#
# Line emissions = quantity × (1 − reuse % / 100) × factor
# Transport      = (materials kgCO₂e / 1000) × (distance km / 100) × 0.05
#
# DISCLAIMER: Simplified cradle-to-gate estimate. Not an EN 15978 assessment.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from config.constants import (
    DEFAULT_EMBODIED_BUDGET_PER_SQ_FT,
    DEFAULT_TRANSPORT_DISTANCE_KM,
    MATERIAL_CATALOGUE,
    TRANSPORT_FACTOR_PER_100_KM,
)
from core.emissions import embodied_carbon
from core.models import BaselineAssumptions


@dataclass(frozen=True)
class MaterialLine:
    category: str
    quantity: float
    unit: str
    embodied_factor: float     # kgCO₂e / unit
    reuse_percent: float = 0.0

    @property
    def net_quantity(self) -> float:
        return self.quantity * (1.0 - self.reuse_percent / 100.0)

    @property
    def emissions_kg(self) -> float:
        return embodied_carbon([(self.net_quantity, self.embodied_factor)])


def typical_fitout_materials(assumptions: Optional[BaselineAssumptions] = None) -> list[MaterialLine]:
    """
    Quick-start bill of materials: the first six catalogue entries at typical
    quantities.  Factors in ``assumptions.embodied_factors`` (keyed by
    lower-case material name) override the catalogue values.
    """
    overrides = assumptions.embodied_factors if assumptions is not None else {}
    return [
        MaterialLine(
            category=name,
            quantity=typical,
            unit=unit,
            embodied_factor=overrides.get(name.lower(), factor),
        )
        for name, factor, unit, typical in MATERIAL_CATALOGUE[:6]
    ]


def calculate_embodied_project(
    materials: Iterable[MaterialLine],
    area_sq_ft: float,
    transport_distance_km: float = DEFAULT_TRANSPORT_DISTANCE_KM,
    budget_per_sq_ft: float = DEFAULT_EMBODIED_BUDGET_PER_SQ_FT,
) -> dict:
    """
    Embodied carbon of a project.

    Returns a dict with keys:
      material_emissions_kg  : float — Σ line emissions (may be negative)
      transport_emissions_kg : float
      total_kg               : float
      per_sq_ft              : float — kgCO₂e / sqft (0 when area <= 0)
      budget_per_sq_ft       : float
      within_budget          : bool
      lines                  : list[dict] — per-material breakdown
    """
    materials = list(materials)
    material_kg = embodied_carbon([(m.net_quantity, m.embodied_factor) for m in materials])
    transport_kg = (material_kg / 1000.0) * (transport_distance_km / 100.0) * TRANSPORT_FACTOR_PER_100_KM
    total_kg = material_kg + transport_kg
    per_sq_ft = total_kg / area_sq_ft if area_sq_ft > 0 else 0.0

    return {
        "material_emissions_kg":  material_kg,
        "transport_emissions_kg": transport_kg,
        "total_kg":               total_kg,
        "per_sq_ft":              per_sq_ft,
        "budget_per_sq_ft":       budget_per_sq_ft,
        "within_budget":          per_sq_ft <= budget_per_sq_ft,
        "lines": [
            {
                "category":      m.category,
                "net_quantity":  m.net_quantity,
                "unit":          m.unit,
                "emissions_kg":  m.emissions_kg,
            }
            for m in materials
        ],
    }


def apply_embodied_reduction(total_kg: float, reduction_percent: float) -> float:
    """Embodied total after a simulated embodied-reduction intervention."""
    return total_kg * (1.0 - reduction_percent / 100.0)
