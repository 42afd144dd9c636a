"""
RECOMMENDATION SELECTOR

Filters a candidate pool by risk category and ranks price movers.
The pool may come from the live market-data feed or from the built-in
catalogue; both reach here through the same Candidate shape.
"""

from typing import Dict, Iterable, List, Sequence, Tuple, TypeVar

from trackmint.domain.models import Candidate, RankedList, RiskCategory
from trackmint.domain.models.categories import RISK_ASSET_CLASSES

T = TypeVar("T")

DEFAULT_TOP_N = 5

CANDIDATE_LIMITS: Dict[RiskCategory, int] = {
    RiskCategory.CONSERVATIVE: 5,
    RiskCategory.BALANCED: 8,
    RiskCategory.AGGRESSIVE: 10,
}

# Live listings carry no size tag; conservative falls back to a name screen
ESTABLISHED_NAME_MARKERS: Sequence[str] = ("Inc", "Corp", "Company")


def _is_eligible(risk_category: RiskCategory, item) -> bool:
    asset_class = getattr(item, "asset_class", None)
    if asset_class is not None:
        return asset_class in RISK_ASSET_CLASSES[risk_category]
    if risk_category == RiskCategory.CONSERVATIVE:
        description = item.description or ""
        return any(marker in description for marker in ESTABLISHED_NAME_MARKERS)
    return True


def screen(risk_category: RiskCategory, items: Iterable[T]) -> List[T]:
    """
    Keep items eligible for the risk category, in input order, up to its limit.

    Items need a `description` and may carry an `asset_class`.
    """
    risk_category = RiskCategory(risk_category)
    eligible = [item for item in items if _is_eligible(risk_category, item)]
    return eligible[: CANDIDATE_LIMITS[risk_category]]


def rank_performers(
    candidates: Iterable[Candidate],
    top_n: int = DEFAULT_TOP_N,
) -> Tuple[List[Candidate], List[Candidate]]:
    """
    Split movers into (top, worst).

    top: positive change %, descending. worst: negative change %, ascending.
    """
    candidates = list(candidates)
    top = sorted(
        (c for c in candidates if c.change_percent > 0),
        key=lambda c: c.change_percent,
        reverse=True,
    )
    worst = sorted(
        (c for c in candidates if c.change_percent < 0),
        key=lambda c: c.change_percent,
    )
    return top[:top_n], worst[:top_n]


def select(
    risk_category: RiskCategory,
    candidate_pool: Iterable[Candidate],
    top_n: int = DEFAULT_TOP_N,
) -> RankedList:
    risk_category = RiskCategory(risk_category)
    eligible = screen(risk_category, candidate_pool)
    picks = sorted(eligible, key=lambda c: c.change_percent, reverse=True)
    top, worst = rank_performers(eligible, top_n)
    return RankedList(
        risk_category=risk_category,
        picks=picks[:top_n],
        top_performers=top,
        worst_performers=worst,
    )
