"""
DOMAIN MODELS - PORTFOLIO STATS

Immutable aggregates over a user's holdings.
No database access. No market data fetching.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from .entities import Holding


@dataclass(frozen=True)
class SectorSlice:
    count: int
    invested: float
    current_value: float


@dataclass(frozen=True)
class PortfolioStats:
    """
    Stats over owned holdings (quantity > 0).
    """
    total_holdings: int
    total_invested: float
    current_value: float
    sector_breakdown: Dict[str, SectorSlice] = field(default_factory=dict)
    top_performers: List[Holding] = field(default_factory=list)
    worst_performers: List[Holding] = field(default_factory=list)

    @property
    def total_profit_loss(self) -> float:
        return self.current_value - self.total_invested

    @property
    def total_profit_loss_percentage(self) -> float:
        if self.total_invested <= 0:
            return 0.0
        return (self.total_profit_loss / self.total_invested) * 100.0


@dataclass(frozen=True)
class CategoryProgress:
    count: int
    total_target: float
    total_current: float


@dataclass(frozen=True)
class GoalStats:
    total_goals: int
    active_goals: int
    completed_goals: int
    paused_goals: int
    total_target: float
    total_current: float
    total_remaining: float
    average_progress: float
    category_breakdown: Dict[str, CategoryProgress] = field(default_factory=dict)
