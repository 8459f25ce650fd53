"""
Impact / feasibility prioritisation matrix for interventions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from config.constants import DEFAULT_DISCOUNT_RATE, PRIORITY_HIGH_THRESHOLD
from core.financial import calculate_intervention_financials
from core.models import Intervention


@dataclass(frozen=True)
class PrioritizationItem:
    id: str
    intervention: str
    impact: float          # 1–10
    feasibility: float     # 1–10
    capex: float = 0.0
    opex: float = 0.0
    savings_annual: float = 0.0
    payback_years: Optional[float] = None
    npv: float = 0.0


def priority_score(
    item: PrioritizationItem,
    impact_weight: float = 50,
    feasibility_weight: float = 50,
) -> float:
    """Weighted score; weights are percentages and normally sum to 100."""
    return (item.impact * impact_weight + item.feasibility * feasibility_weight) / 100.0


def quadrant(item: PrioritizationItem) -> str:
    high_impact = item.impact >= PRIORITY_HIGH_THRESHOLD
    high_feasibility = item.feasibility >= PRIORITY_HIGH_THRESHOLD
    if high_impact and high_feasibility:
        return "Quick Wins"
    if high_impact:
        return "Major Projects"
    if high_feasibility:
        return "Fill-Ins"
    return "Low Priority"


def prioritize(
    items: Iterable[PrioritizationItem],
    impact_weight: float = 50,
    feasibility_weight: float = 50,
) -> list[dict]:
    """Items ordered by descending priority score, each tagged with its quadrant."""
    ranked = sorted(
        items,
        key=lambda i: priority_score(i, impact_weight, feasibility_weight),
        reverse=True,
    )
    return [
        {
            "item":     item,
            "score":    priority_score(item, impact_weight, feasibility_weight),
            "quadrant": quadrant(item),
        }
        for item in ranked
    ]


def items_from_interventions(
    interventions: Iterable[Intervention],
    impact: Mapping[str, float],
    feasibility: Mapping[str, float],
    discount_rate: float = DEFAULT_DISCOUNT_RATE,
) -> list[PrioritizationItem]:
    """
    Build matrix items from interventions, filling the financial columns
    from calculate_intervention_financials(). Scores missing from the
    ``impact`` / ``feasibility`` maps default to 1.
    """
    items = []
    for iv in interventions:
        fin = calculate_intervention_financials(iv, discount_rate)
        items.append(PrioritizationItem(
            id=iv.id,
            intervention=iv.name,
            impact=impact.get(iv.id, 1),
            feasibility=feasibility.get(iv.id, 1),
            capex=iv.capex,
            opex=iv.opex_annual,
            savings_annual=iv.savings_annual,
            payback_years=fin["payback_years"],
            npv=fin["npv"],
        ))
    return items
