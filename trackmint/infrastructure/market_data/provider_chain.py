"""
Provider chain - try primary, then fallbacks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from trackmint.infrastructure.market_data.types import MarketDataProvider, Quote, SymbolInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamedProvider:
    name: str
    provider: MarketDataProvider


class TrackedMarketDataProvider:
    def __init__(self, provider: MarketDataProvider, name: str):
        self.provider = provider
        self.name = name
        self.last_quote_sources: Dict[str, str] = {}
        self.last_listing_source: Optional[str] = None

    def get_last_sources(self) -> Dict[str, object]:
        return {
            "quotes": dict(self.last_quote_sources),
            "listing": self.last_listing_source,
        }

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        quote = await self.provider.get_quote(symbol)
        if quote is not None:
            self.last_quote_sources[quote.symbol] = self.name
        return quote

    async def list_symbols(self, limit: int) -> List[SymbolInfo]:
        data = await self.provider.list_symbols(limit)
        if data:
            self.last_listing_source = self.name
        return data


class ChainedMarketDataProvider:
    def __init__(self, providers: List[NamedProvider]):
        self.providers = providers
        self.last_quote_sources: Dict[str, str] = {}
        self.last_listing_source: Optional[str] = None

    def get_last_sources(self) -> Dict[str, object]:
        return {
            "quotes": dict(self.last_quote_sources),
            "listing": self.last_listing_source,
        }

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        for named in self.providers:
            try:
                quote = await named.provider.get_quote(symbol)
            except Exception as exc:
                logger.warning(f"{named.name} quote failed for {symbol}: {exc}")
                continue
            if quote is not None:
                self.last_quote_sources[quote.symbol] = named.name
                return quote
        return None

    async def list_symbols(self, limit: int) -> List[SymbolInfo]:
        for named in self.providers:
            try:
                data = await named.provider.list_symbols(limit)
            except Exception as exc:
                logger.warning(f"{named.name} symbol listing failed: {exc}")
                continue
            if data:
                self.last_listing_source = named.name
                return data
        return []
