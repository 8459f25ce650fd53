"""
Tenant commuting profiles (Scope 3, Category 7).

Annual person-km per mode = employees × one-way km × 2 × days/week × 50 weeks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from config.constants import COMMUTE_EMISSION_FACTORS, COMMUTE_WEEKS_PER_YEAR
from core.emissions import commuting_emissions


@dataclass(frozen=True)
class CommuteMode:
    mode: str
    count: int
    avg_distance_km: float      # one way
    days_per_week: float = 5


def annual_person_km(commute: CommuteMode) -> float:
    return commute.count * commute.avg_distance_km * 2 * commute.days_per_week * COMMUTE_WEEKS_PER_YEAR


def calculate_commuting_profile(
    modes: Iterable[CommuteMode],
    factors: Mapping[str, float] = COMMUTE_EMISSION_FACTORS,
) -> dict:
    """
    Annual commuting emissions for one site's workforce.

    Returns total_tco2e, by_mode (tCO₂e per mode), employees and
    avg_commute_distance_km (employee-weighted, 0 with no employees).
    """
    modes = list(modes)
    by_mode = {m.mode: commuting_emissions([(m.mode, annual_person_km(m))], factors) for m in modes}
    employees = sum(m.count for m in modes)
    avg_distance = (
        sum(m.count * m.avg_distance_km for m in modes) / employees if employees > 0 else 0.0
    )
    return {
        "total_tco2e":             commuting_emissions([(m.mode, annual_person_km(m)) for m in modes], factors),
        "by_mode":                 by_mode,
        "employees":               employees,
        "avg_commute_distance_km": avg_distance,
    }
