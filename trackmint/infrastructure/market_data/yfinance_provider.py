"""
YFinance Market Data Provider
Yahoo Finance quotes, async-safe via thread offloading
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional

import yfinance as yf

from trackmint.infrastructure.market_data.types import Quote, SymbolInfo

logger = logging.getLogger(__name__)


class YFinanceProvider:
    """
    Yahoo Finance quote provider.
    Yahoo exposes no symbol listing, so list_symbols() is always empty.
    """

    def __init__(self, cache_ttl_seconds: int = 60):
        self.cache_ttl_seconds = cache_ttl_seconds
        self._cache: Dict[str, tuple[float, object]] = {}

    def _cache_get(self, key: str) -> Optional[object]:
        cached = self._cache.get(key)
        if not cached:
            return None
        ts, value = cached
        if time.time() - ts > self.cache_ttl_seconds:
            return None
        return value

    def _cache_set(self, key: str, value: object) -> None:
        self._cache[key] = (time.time(), value)

    @staticmethod
    def _read_fast_info(symbol: str) -> tuple:
        info = yf.Ticker(symbol).fast_info
        return info.get("lastPrice"), info.get("previousClose")

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        symbol = symbol.upper()
        cache_key = f"quote:{symbol}"
        cached = self._cache_get(cache_key)
        if cached is not None:
            return cached  # type: ignore[return-value]

        try:
            last_price, previous_close = await asyncio.to_thread(self._read_fast_info, symbol)
        except Exception as exc:
            # yfinance surfaces network and parsing failures with assorted types
            logger.debug(f"yfinance quote failed for {symbol}: {exc}")
            return None

        if not last_price or last_price <= 0:
            return None
        change = float(last_price - previous_close) if previous_close else 0.0
        change_percent = (change / float(previous_close)) * 100.0 if previous_close else 0.0
        quote = Quote(
            symbol=symbol,
            price=float(last_price),
            change=change,
            change_percent=change_percent,
            previous_close=float(previous_close) if previous_close else None,
        )
        self._cache_set(cache_key, quote)
        return quote

    async def list_symbols(self, limit: int) -> List[SymbolInfo]:
        return []
