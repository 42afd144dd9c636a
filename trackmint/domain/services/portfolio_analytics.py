"""
Portfolio analytics: totals, sector breakdown and P&L ranking over owned holdings.
"""

from typing import Dict, Iterable

from trackmint.domain.models import Holding, PortfolioStats, SectorSlice

TOP_N = 5


def portfolio_stats(holdings: Iterable[Holding], top_n: int = TOP_N) -> PortfolioStats:
    owned = [h for h in holdings if h.quantity > 0]

    sectors: Dict[str, SectorSlice] = {}
    for holding in owned:
        if not holding.sector:
            continue
        key = holding.sector
        slot = sectors.get(key, SectorSlice(0, 0.0, 0.0))
        sectors[key] = SectorSlice(
            count=slot.count + 1,
            invested=slot.invested + holding.total_invested,
            current_value=slot.current_value + holding.current_value,
        )

    gainers = sorted(
        (h for h in owned if h.profit_loss_percentage > 0),
        key=lambda h: h.profit_loss_percentage,
        reverse=True,
    )
    losers = sorted(
        (h for h in owned if h.profit_loss_percentage < 0),
        key=lambda h: h.profit_loss_percentage,
    )

    return PortfolioStats(
        total_holdings=len(owned),
        total_invested=sum(h.total_invested for h in owned),
        current_value=sum(h.current_value for h in owned),
        sector_breakdown=sectors,
        top_performers=gainers[:top_n],
        worst_performers=losers[:top_n],
    )
