import pytest

from trackmint.domain.models import AssetClass, Candidate, RiskCategory
from trackmint.domain.services.recommendation_selector import (
    CANDIDATE_LIMITS,
    rank_performers,
    screen,
    select,
)
from trackmint.infrastructure.market_data.types import SymbolInfo


def _c(symbol, pct, asset_class=None, description=None) -> Candidate:
    return Candidate(
        symbol=symbol,
        description=description or f"{symbol} Inc",
        current_price=100.0,
        change=pct,
        change_percent=pct,
        asset_class=asset_class,
    )


def test_conservative_excludes_mid_and_small_caps():
    pool = [
        _c("MEGA", 1.0, AssetClass.MEGA_CAP),
        _c("LARGE", 2.0, AssetClass.LARGE_CAP),
        _c("MID", 9.0, AssetClass.MID_CAP),
        _c("SMALL", 12.0, AssetClass.SMALL_CAP),
    ]
    ranked = select(RiskCategory.CONSERVATIVE, pool)
    assert [c.symbol for c in ranked.picks] == ["LARGE", "MEGA"]


def test_aggressive_excludes_mega_caps():
    pool = [_c("MEGA", 5.0, AssetClass.MEGA_CAP), _c("SMALL", 1.0, AssetClass.SMALL_CAP)]
    ranked = select("aggressive", pool)
    assert [c.symbol for c in ranked.picks] == ["SMALL"]


def test_picks_sorted_by_change_and_truncated():
    pool = [_c(f"S{i}", float(i), AssetClass.LARGE_CAP) for i in range(8)]
    ranked = select(RiskCategory.BALANCED, pool, top_n=3)
    assert [c.symbol for c in ranked.picks] == ["S7", "S6", "S5"]


def test_performers_split_by_sign():
    top, worst = rank_performers([_c("A", 3.0), _c("B", -1.0), _c("C", 0.0), _c("D", -4.0), _c("E", 1.0)])
    assert [c.symbol for c in top] == ["A", "E"]
    assert [c.symbol for c in worst] == ["D", "B"]


def test_live_listing_uses_name_screen_for_conservative():
    listing = [
        SymbolInfo("AAA", "Alpha Corp"),
        SymbolInfo("BBB", "Beta Holdings"),
        SymbolInfo("CCC", "Gamma Company"),
    ]
    assert [s.symbol for s in screen(RiskCategory.CONSERVATIVE, listing)] == ["AAA", "CCC"]
    assert len(screen(RiskCategory.AGGRESSIVE, listing)) == 3


@pytest.mark.parametrize("risk", list(RiskCategory))
def test_screen_respects_candidate_limits(risk):
    listing = [SymbolInfo(f"S{i}", f"Stock {i} Inc") for i in range(30)]
    assert len(screen(risk, listing)) == CANDIDATE_LIMITS[risk]
