import pytest

from trackmint.domain.models import Holding
from trackmint.domain.services.portfolio_analytics import portfolio_stats


def _holding(symbol, quantity, average_cost, current_price=None, sector=None) -> Holding:
    return Holding(
        user_id=1,
        symbol=symbol,
        company_name=f"{symbol} Inc",
        quantity=quantity,
        average_cost=average_cost,
        current_price=current_price,
        sector=sector,
    )


def test_current_value_falls_back_to_average_cost():
    holding = _holding("MSFT", 10, 100)
    assert holding.current_value == pytest.approx(1000)
    assert holding.profit_loss == pytest.approx(0)
    assert holding.profit_loss_percentage == 0.0


def test_derived_values_with_price():
    holding = _holding("MSFT", 10, 100, current_price=120)
    assert holding.total_invested == pytest.approx(1000)
    assert holding.current_value == pytest.approx(1200)
    assert holding.profit_loss == pytest.approx(200)
    assert holding.profit_loss_percentage == pytest.approx(20)


def test_empty_holding_has_zero_pl_percentage():
    assert _holding("NVDA", 0, 0).profit_loss_percentage == 0.0


def test_stats_totals_sectors_and_rankings():
    holdings = [
        _holding("AAPL", 10, 100, current_price=150, sector="Technology"),
        _holding("MSFT", 5, 200, current_price=180, sector="Technology"),
        _holding("JNJ", 4, 150, current_price=165, sector="Healthcare"),
        _holding("KO", 20, 50, current_price=40),
        _holding("WATCH", 0, 0, current_price=99, sector="Technology"),
    ]

    stats = portfolio_stats(holdings)

    assert stats.total_holdings == 4
    assert stats.total_invested == pytest.approx(1000 + 1000 + 600 + 1000)
    assert stats.current_value == pytest.approx(1500 + 900 + 660 + 800)
    assert stats.total_profit_loss == pytest.approx(3860 - 3600)
    assert stats.total_profit_loss_percentage == pytest.approx(260 / 3600 * 100)

    # Unsectored holdings and watchlist entries stay out of the breakdown
    assert set(stats.sector_breakdown) == {"Technology", "Healthcare"}
    assert stats.sector_breakdown["Technology"].count == 2
    assert stats.sector_breakdown["Technology"].invested == pytest.approx(2000)

    assert [h.symbol for h in stats.top_performers] == ["AAPL", "JNJ"]
    assert [h.symbol for h in stats.worst_performers] == ["KO", "MSFT"]


def test_stats_for_empty_portfolio():
    stats = portfolio_stats([])
    assert stats.total_holdings == 0
    assert stats.total_profit_loss_percentage == 0.0
    assert stats.sector_breakdown == {}
