"""
Finnhub Market Data Provider
US equity quotes and symbol listing over the Finnhub REST API.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional

import httpx

from trackmint.infrastructure.market_data.types import Quote, SymbolInfo

logger = logging.getLogger(__name__)


class FinnhubProvider:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://finnhub.io/api/v1",
        timeout_seconds: float = 10.0,
        cache_ttl_seconds: int = 60,
        exchange: str = "US",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = (api_key or "").strip()
        if not self.api_key:
            raise ValueError("Finnhub API key missing")
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.cache_ttl_seconds = cache_ttl_seconds
        self.exchange = exchange
        self._transport = transport
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

    async def _request_json(self, path: str, params: Optional[dict] = None):
        query = dict(params or {})
        query["token"] = self.api_key
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.get(f"{self.base_url}{path}", params=query)
                if response.status_code != 200:
                    logger.debug(f"Finnhub API {response.status_code} for {path}")
                    return None
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug(f"Finnhub request failed for {path}: {exc}")
            return None
        if isinstance(payload, dict) and payload.get("error"):
            logger.debug(f"Finnhub API error for {path}: {payload['error']}")
            return None
        return payload

    # ------------------------------------------------------------------
    # QUOTES
    # ------------------------------------------------------------------

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        symbol = symbol.upper()
        cache_key = f"quote:{symbol}"
        cached = self._cache_get(cache_key)
        if cached is not None:
            return cached  # type: ignore[return-value]

        payload = await self._request_json("/quote", {"symbol": symbol})
        if not isinstance(payload, dict):
            return None

        # c = current, d = change, dp = change %, pc = previous close
        price = payload.get("c") or 0
        if price <= 0:
            return None
        quote = Quote(
            symbol=symbol,
            price=float(price),
            change=float(payload.get("d") or 0),
            change_percent=float(payload.get("dp") or 0),
            previous_close=float(payload["pc"]) if payload.get("pc") else None,
        )
        self._cache_set(cache_key, quote)
        return quote

    # ------------------------------------------------------------------
    # SYMBOLS
    # ------------------------------------------------------------------

    async def list_symbols(self, limit: int) -> List[SymbolInfo]:
        cache_key = f"symbols:{self.exchange}"
        listing = self._cache_get(cache_key)
        if listing is None:
            payload = await self._request_json("/stock/symbol", {"exchange": self.exchange})
            if not isinstance(payload, list):
                return []
            listing = [
                SymbolInfo(
                    symbol=item.get("symbol", ""),
                    description=item.get("description") or "",
                    display_symbol=item.get("displaySymbol"),
                )
                for item in payload
                if item.get("symbol")
            ]
            self._cache_set(cache_key, listing)
        return list(listing)[:limit]  # type: ignore[arg-type]
