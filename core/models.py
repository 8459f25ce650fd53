# ═══════════════════════════════════════════════════════════════════════════════
# Portfolio Decarbonisation Engine — Data Model
# © 2026 Aparajita Parihar. All rights reserved.
#
# Immutable input records (Site, BaselineAssumptions, Intervention, Scenario)
# and the canonical output records (Emissions, EmissionsBySource,
# ScenarioResult).  Units: energy in kWh, mass in tCO₂e unless a field name
# says otherwise, area in square feet.
#
# This file has ZERO third-party imports.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Any, Optional

from config.assumptions import DEFAULT_ASSUMPTIONS
from config.constants import DEFAULT_LIFESPAN_YEARS, DEFAULT_REFRIGERANT_LEAKAGE_PERCENT


def _known_fields(cls, data: dict) -> dict:
    """Drop keys a dataclass does not declare (timestamps, UI metadata)."""
    names = {f.name for f in dataclasses.fields(cls)}
    return {k: v for k, v in data.items() if k in names}


# ─────────────────────────────────────────────────────────────────────────────
# INPUTS
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Site:
    """
    One managed real-estate site.

    ``measured_kwh`` always wins over ``benchmark_eui``; when both are absent
    the site's annual energy is treated as 0.
    """

    id: str
    name: str
    area_sq_ft: float
    state: str = "default"
    city: str = ""
    occupancy: int = 0

    # Energy
    measured_kwh: Optional[float] = None
    benchmark_eui: Optional[float] = None      # kWh / sqft / year

    # Generator & fuel
    diesel_liters_per_year: Optional[float] = None
    lpg_kg_per_year: Optional[float] = None

    # Refrigerants
    refrigerant_type: Optional[str] = None
    refrigerant_kg: Optional[float] = None
    refrigerant_gwp: Optional[float] = None
    refrigerant_leakage_percent: float = DEFAULT_REFRIGERANT_LEAKAGE_PERCENT

    # Renewables
    solar_installed_kw: Optional[float] = None
    roof_area_sq_ft: Optional[float] = None

    has_tenant_metering: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def __post_init__(self) -> None:
        # Nullable columns arrive as None; leakage has a non-zero default.
        if self.refrigerant_leakage_percent is None:
            object.__setattr__(self, "refrigerant_leakage_percent", DEFAULT_REFRIGERANT_LEAKAGE_PERCENT)

    @classmethod
    def from_dict(cls, data: dict) -> "Site":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class BaselineAssumptions:
    """Emission factors shared by every calculation in one context."""

    grid_factors: dict[str, float]
    diesel_density: float
    diesel_emission_factor: float
    lpg_emission_factor: float
    refrigerant_gwps: dict[str, float] = field(default_factory=dict)
    embodied_factors: dict[str, float] = field(default_factory=dict)
    eui_benchmarks: dict[str, float] = field(default_factory=dict)
    fiscal_year: int = 2025

    def __post_init__(self) -> None:
        if "default" not in self.grid_factors:
            raise ValueError("grid_factors must include a 'default' entry.")

    def grid_factor_for(self, state: str) -> float:
        return self.grid_factors.get(state, self.grid_factors["default"])

    @classmethod
    def from_dict(cls, data: dict) -> "BaselineAssumptions":
        return cls(**_known_fields(cls, data))


def default_assumptions() -> BaselineAssumptions:
    """Return a fresh copy of the registry defaults in config/assumptions.py."""
    data = {k: (dict(v) if isinstance(v, dict) else v) for k, v in DEFAULT_ASSUMPTIONS.items()}
    return BaselineAssumptions.from_dict(data)


class InterventionCategory(str, enum.Enum):
    EFFICIENCY = "efficiency"
    RENEWABLES = "renewables"
    FUEL_SWITCH = "fuel-switch"
    EMBODIED = "embodied"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> "InterventionCategory":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown intervention category {value!r}. "
                f"Expected one of: {[c.value for c in cls]}"
            )


@dataclass(frozen=True)
class Intervention:
    """
    A dated, portfolio-wide decarbonisation measure.

    Only the effect fields relevant to ``category`` are read by the
    simulator; the rest are ignored.
    """

    id: str
    name: str
    category: InterventionCategory
    implementation_year: int
    lifespan_years: int = DEFAULT_LIFESPAN_YEARS
    description: str = ""

    # Effect magnitudes
    energy_savings_percent: Optional[float] = None
    solar_kw_to_install: Optional[float] = None
    ppa_percent_of_load: Optional[float] = None
    embodied_reduction_percent: Optional[float] = None
    emission_reduction_percent: Optional[float] = None

    # Financials (reporting currency)
    capex: float = 0.0
    opex_annual: float = 0.0
    savings_annual: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", InterventionCategory.parse(self.category))

    @classmethod
    def from_dict(cls, data: dict) -> "Intervention":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class Scenario:
    """
    A decarbonisation pathway: horizon, SBTi targets and interventions.

    Interventions are selected by ``implementation_year``; their order in
    the tuple carries no meaning.
    """

    id: str
    name: str
    baseline_year: int
    target_year: int
    near_term_target_2030_percent: float = 42.0
    long_term_target_2040_percent: float = 90.0
    interventions: tuple[Intervention, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        items = tuple(
            i if isinstance(i, Intervention) else Intervention.from_dict(i)
            for i in self.interventions
        )
        object.__setattr__(self, "interventions", items)

    @property
    def years(self) -> range:
        return range(self.baseline_year, self.target_year + 1)

    @classmethod
    def from_dict(cls, data: dict) -> "Scenario":
        return cls(**_known_fields(cls, data))


# ─────────────────────────────────────────────────────────────────────────────
# OUTPUTS
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Emissions:
    """
    Canonical emissions record, tCO₂e.

    ``total`` is always scope1 + scope2 (location-based) + scope3; the
    market-based variant is only summed on request via ``total_market_based``.
    """

    scope1: float = 0.0
    scope2_location_based: float = 0.0
    scope2_market_based: float = 0.0
    scope3: float = 0.0
    eui: float = 0.0                          # kWh / sqft / year
    renewable_percent: float = 0.0
    embodied_carbon_per_sq_ft: float = 0.0    # kgCO₂e / sqft

    @property
    def total(self) -> float:
        return self.scope1 + self.scope2_location_based + self.scope3

    @property
    def total_market_based(self) -> float:
        return self.scope1 + self.scope2_market_based + self.scope3

    def to_dict(self) -> dict:
        data = dataclasses.asdict(self)
        data["total"] = self.total
        data["total_market_based"] = self.total_market_based
        return data


@dataclass(frozen=True)
class EmissionsBySource:
    electricity: float = 0.0
    diesel: float = 0.0
    lpg: float = 0.0
    refrigerants: float = 0.0
    embodied_carbon: float = 0.0
    commuting: float = 0.0
    other: float = 0.0

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class ScenarioResult:
    """Outputs of one simulate_scenario() run."""

    scenario_id: str
    yearly_emissions: dict[int, Emissions]
    sbti_compliant: bool
    intervention_impact: dict[str, float]     # tCO₂e avoided in the year applied
    target_trajectory: dict[int, float]
    baseline_total: float
    embodied_reduction_percent: dict[str, float] = field(default_factory=dict)   # per site, at target_year

    def totals_by_year(self) -> dict[int, float]:
        return {year: e.total for year, e in self.yearly_emissions.items()}
