# ═══════════════════════════════════════════════════════════════════════════════
# Portfolio Decarbonisation Engine — SBTi Trajectory & Compliance
# © 2026 Aparajita Parihar. All rights reserved.
#
# Target pathway: straight-line reduction from the baseline year (0 %) to
# the target year (reduction_percent %), per the SBTi absolute contraction
# approach. Not a compounding decay curve.
#
# Compliance: every target year must have an actual value within
# (1 + tolerance) × target.  A target year with no actual data FAILS.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import logging
from typing import Mapping

from config.constants import SBTI_TOLERANCE

logger = logging.getLogger(__name__)


def calculate_sbti_trajectory(
    baseline_year: int,
    baseline_emissions: float,
    target_year: int,
    reduction_percent: float,
) -> dict[int, float]:
    """
    Linear target emissions for every year from baseline to target inclusive.

    target[year] = baseline × (1 − reduction_percent × fraction / 100)
    where fraction = (year − baseline_year) / (target_year − baseline_year).

    A zero-length horizon returns ``{baseline_year: baseline_emissions}``.
    """
    if target_year < baseline_year:
        raise ValueError(
            f"target_year ({target_year}) must not precede baseline_year ({baseline_year})."
        )
    span = target_year - baseline_year
    if span == 0:
        return {baseline_year: baseline_emissions}

    trajectory: dict[int, float] = {}
    for year in range(baseline_year, target_year + 1):
        reduction = reduction_percent * (year - baseline_year) / span
        trajectory[year] = baseline_emissions * (1.0 - reduction / 100.0)
    return trajectory


def sbti_compliance_report(
    actual_by_year: Mapping[int, float],
    target_by_year: Mapping[int, float],
    tolerance: float = SBTI_TOLERANCE,
) -> list[dict]:
    """
    Year-by-year comparison of actual against target emissions.

    Each row: year, actual (None when missing), target, limit
    (target × (1 + tolerance)), missing, compliant.
    """
    rows = []
    for year in sorted(target_by_year):
        target = target_by_year[year]
        limit = target * (1.0 + tolerance)
        actual = actual_by_year.get(year)
        missing = actual is None
        rows.append({
            "year":      year,
            "actual":    actual,
            "target":    target,
            "limit":     limit,
            "missing":   missing,
            "compliant": (not missing) and actual <= limit,
        })
    return rows


def check_sbti_compliance(
    actual_by_year: Mapping[int, float],
    target_by_year: Mapping[int, float],
    tolerance: float = SBTI_TOLERANCE,
) -> bool:
    """True iff every target year has an actual value within tolerance."""
    report = sbti_compliance_report(actual_by_year, target_by_year, tolerance)
    missing = [row["year"] for row in report if row["missing"]]
    if missing:
        logger.info("SBTi check failed closed: no actual data for years %s", missing)
    return all(row["compliant"] for row in report)
