import httpx
import pytest

from trackmint.config import Settings
from trackmint.infrastructure.market_data.finnhub_provider import FinnhubProvider
from trackmint.infrastructure.market_data.provider_chain import (
    ChainedMarketDataProvider,
    NamedProvider,
    TrackedMarketDataProvider,
)
from trackmint.infrastructure.market_data.provider_factory import (
    _build_provider,
    get_market_data_provider,
)
from trackmint.infrastructure.market_data.types import Quote, SymbolInfo


def _finnhub(handler) -> FinnhubProvider:
    return FinnhubProvider(api_key="secret", transport=httpx.MockTransport(handler))


async def test_finnhub_quote_parsing_and_cache():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url)
        assert request.url.path.endswith("/quote")
        assert request.url.params["token"] == "secret"
        return httpx.Response(200, json={"c": 175.5, "d": 2.5, "dp": 1.45, "pc": 173.0})

    provider = _finnhub(handler)
    quote = await provider.get_quote("aapl")

    assert quote == Quote(symbol="AAPL", price=175.5, change=2.5, change_percent=1.45, previous_close=173.0)
    assert await provider.get_quote("AAPL") == quote
    assert len(calls) == 1


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"c": 0, "d": None, "dp": None, "pc": 0}),
        httpx.Response(429, json={"error": "limit"}),
        httpx.Response(200, json={"error": "bad symbol"}),
        httpx.Response(200, content=b"not json"),
    ],
)
async def test_finnhub_unusable_quote_is_none(response):
    provider = _finnhub(lambda request: response)
    assert await provider.get_quote("XYZ") is None


async def test_finnhub_network_error_is_none():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    assert await _finnhub(handler).get_quote("AAPL") is None


async def test_finnhub_symbol_listing():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["exchange"] == "US"
        return httpx.Response(
            200,
            json=[
                {"symbol": "AAPL", "description": "APPLE INC", "displaySymbol": "AAPL"},
                {"symbol": "", "description": "blank"},
                {"symbol": "MSFT", "description": "MICROSOFT CORP", "displaySymbol": "MSFT"},
                {"symbol": "KO", "description": "COCA-COLA CO", "displaySymbol": "KO"},
            ],
        )

    listing = await _finnhub(handler).list_symbols(2)
    assert [s.symbol for s in listing] == ["AAPL", "MSFT"]


def test_finnhub_requires_key():
    with pytest.raises(ValueError):
        FinnhubProvider(api_key="  ")


class _Fixed:
    def __init__(self, quote=None, listing=None, error=None):
        self.quote = quote
        self.listing = listing or []
        self.error = error

    async def get_quote(self, symbol):
        if self.error:
            raise self.error
        return self.quote

    async def list_symbols(self, limit):
        if self.error:
            raise self.error
        return self.listing[:limit]


async def test_chain_falls_through_and_tracks_source():
    quote = Quote("AAPL", 10.0, 1.0, 10.0)
    chain = ChainedMarketDataProvider([
        NamedProvider("finnhub", _Fixed(error=RuntimeError("boom"))),
        NamedProvider("empty", _Fixed()),
        NamedProvider("yfinance", _Fixed(quote=quote)),
    ])

    assert await chain.get_quote("AAPL") == quote
    assert chain.get_last_sources()["quotes"] == {"AAPL": "yfinance"}


async def test_chain_listing_uses_first_non_empty():
    chain = ChainedMarketDataProvider([
        NamedProvider("yfinance", _Fixed()),
        NamedProvider("finnhub", _Fixed(listing=[SymbolInfo("AAPL", "Apple Inc")])),
    ])
    assert [s.symbol for s in await chain.list_symbols(5)] == ["AAPL"]
    assert chain.get_last_sources()["listing"] == "finnhub"


async def test_chain_returns_none_when_all_fail():
    chain = ChainedMarketDataProvider([NamedProvider("a", _Fixed()), NamedProvider("b", _Fixed())])
    assert await chain.get_quote("AAPL") is None
    assert await chain.list_symbols(5) == []


async def test_tracked_provider_records_source():
    tracked = TrackedMarketDataProvider(_Fixed(quote=Quote("KO", 59.0, 0.1, 0.2)), "yfinance")
    await tracked.get_quote("KO")
    assert tracked.get_last_sources()["quotes"] == {"KO": "yfinance"}


def test_factory_skips_finnhub_without_key():
    provider = get_market_data_provider(Settings(FINNHUB_API_KEY=None, YFINANCE_ENABLED=True))
    assert isinstance(provider, TrackedMarketDataProvider)
    assert provider.name == "yfinance"


def test_factory_chains_finnhub_then_yfinance():
    provider = get_market_data_provider(Settings(FINNHUB_API_KEY="k", YFINANCE_ENABLED=True))
    assert isinstance(provider, ChainedMarketDataProvider)
    assert [p.name for p in provider.providers] == ["finnhub", "yfinance"]


def test_factory_without_providers_raises():
    with pytest.raises(RuntimeError):
        get_market_data_provider(Settings(FINNHUB_API_KEY=None, YFINANCE_ENABLED=False))


def test_unknown_provider_name():
    with pytest.raises(ValueError):
        _build_provider("bloomberg", Settings())
