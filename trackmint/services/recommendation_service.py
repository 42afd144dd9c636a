"""
Recommendation Service
Builds per-risk stock, fund and bond suggestions.

Live market data is tried first; the built-in catalogue is the fallback.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from trackmint.domain.models import (
    BondSuggestion,
    Candidate,
    FundSuggestion,
    RankedList,
    RiskCategory,
)
from trackmint.domain.services.recommendation_selector import DEFAULT_TOP_N, screen, select
from trackmint.infrastructure.catalog.loader import RecommendationCatalog
from trackmint.infrastructure.market_data.types import MarketDataProvider, SymbolInfo

logger = logging.getLogger(__name__)

SOURCE_LIVE = "live"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class Recommendations:
    ranked: RankedList
    source: str
    mutual_funds: List[FundSuggestion]
    bonds: List[BondSuggestion]


class RecommendationService:
    def __init__(
        self,
        catalog: RecommendationCatalog,
        market_data: Optional[MarketDataProvider] = None,
        quote_timeout_seconds: float = 5.0,
        symbol_limit: int = 20,
        top_n: int = DEFAULT_TOP_N,
    ):
        self.catalog = catalog
        self.market_data = market_data
        self.quote_timeout_seconds = quote_timeout_seconds
        self.symbol_limit = symbol_limit
        self.top_n = top_n

    async def recommend(self, risk: RiskCategory) -> Recommendations:
        risk = RiskCategory(risk)
        fallback = self.catalog.fallback_stocks(risk)

        pool = await self._live_candidates(risk, fallback)
        source = SOURCE_LIVE
        if not pool:
            logger.warning(f"⚠️ Live candidates unavailable for {risk.value}, using catalogue")
            pool = fallback
            source = SOURCE_FALLBACK

        ranked = select(risk, pool, self.top_n)
        logger.info(f"💡 {len(ranked.picks)} {risk.value} picks from {source} data")
        return Recommendations(
            ranked=ranked,
            source=source,
            mutual_funds=self.catalog.mutual_funds(risk),
            bonds=self.catalog.bonds(risk),
        )

    async def _live_candidates(
        self, risk: RiskCategory, fallback: List[Candidate]
    ) -> List[Candidate]:
        if self.market_data is None:
            return []

        try:
            listing = await self.market_data.list_symbols(self.symbol_limit)
        except Exception as e:
            logger.warning("Symbol listing failed: %s", e)
            return []

        screened = screen(risk, listing)
        if not screened:
            return []

        return list(
            await asyncio.gather(
                *(self._quote_candidate(i, info, fallback) for i, info in enumerate(screened))
            )
        )

    async def _quote_candidate(
        self, index: int, info: SymbolInfo, fallback: List[Candidate]
    ) -> Candidate:
        quote = None
        try:
            quote = await asyncio.wait_for(
                self.market_data.get_quote(info.symbol), timeout=self.quote_timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning("Quote timed out for %s", info.symbol)
        except Exception as e:
            logger.warning("Quote failed for %s: %s", info.symbol, e)

        if quote is not None and quote.price > 0:
            return Candidate(
                symbol=info.symbol,
                description=info.description,
                current_price=quote.price,
                change=quote.change,
                change_percent=quote.change_percent,
            )

        # Borrow price fields from the catalogue stock at the same position
        donor = fallback[index % len(fallback)]
        return Candidate(
            symbol=info.symbol,
            description=info.description,
            current_price=donor.current_price,
            change=donor.change,
            change_percent=donor.change_percent,
        )
