"""
Market data provider factory (settings-driven).
"""

from __future__ import annotations

from typing import List, Optional

from trackmint.config import Settings, settings as default_settings
from trackmint.infrastructure.market_data.types import MarketDataProvider
from trackmint.infrastructure.market_data.provider_chain import (
    ChainedMarketDataProvider,
    NamedProvider,
    TrackedMarketDataProvider,
)
from trackmint.infrastructure.market_data.finnhub_provider import FinnhubProvider
from trackmint.infrastructure.market_data.yfinance_provider import YFinanceProvider


def _build_provider(name: str, config: Settings) -> MarketDataProvider:
    name = (name or "").lower()
    if name == "finnhub":
        return FinnhubProvider(
            api_key=config.FINNHUB_API_KEY or "",
            base_url=config.FINNHUB_BASE_URL,
            timeout_seconds=config.MARKET_DATA_TIMEOUT_SECONDS,
            cache_ttl_seconds=config.MARKET_DATA_CACHE_TTL,
        )
    if name == "yfinance":
        if not config.YFINANCE_ENABLED:
            raise ValueError("yfinance disabled")
        return YFinanceProvider(cache_ttl_seconds=config.MARKET_DATA_CACHE_TTL)
    raise ValueError(f"Unknown market data provider: {name}")


def get_market_data_provider(config: Optional[Settings] = None) -> MarketDataProvider:
    """Finnhub first (when a key is configured), then yfinance."""
    config = config or default_settings

    providers: List[NamedProvider] = []
    for name in ("finnhub", "yfinance"):
        try:
            providers.append(NamedProvider(name, _build_provider(name, config)))
        except ValueError:
            # Skip providers without credentials or disabled by config
            continue

    if not providers:
        raise RuntimeError("No valid market data providers configured")
    if len(providers) == 1:
        only = providers[0]
        return TrackedMarketDataProvider(only.provider, only.name)
    return ChainedMarketDataProvider(providers)
