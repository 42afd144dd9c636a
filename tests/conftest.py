from typing import AsyncGenerator, Dict, List, Optional

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from trackmint.api.deps import get_advisor, get_market_data
from trackmint.infrastructure.ai.gemini_client import GeminiAdvisor
from trackmint.infrastructure.db import models  # noqa: F401
from trackmint.infrastructure.db.database import Base, get_db
from trackmint.infrastructure.market_data.types import Quote, SymbolInfo
from trackmint.main import app as trackmint_app


class StubMarketData:
    """In-memory market-data collaborator"""

    def __init__(
        self,
        quotes: Optional[Dict[str, Quote]] = None,
        listing: Optional[List[SymbolInfo]] = None,
    ):
        self.quotes = quotes or {}
        self.listing = listing or []
        self.last_quote_sources: Dict[str, str] = {}
        self.quote_calls: List[str] = []

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        self.quote_calls.append(symbol)
        quote = self.quotes.get(symbol)
        if quote is not None:
            self.last_quote_sources[symbol] = "stub"
        return quote

    async def list_symbols(self, limit: int) -> List[SymbolInfo]:
        return self.listing[:limit]

    def get_last_sources(self):
        return {"quotes": dict(self.last_quote_sources), "listing": "stub"}


@pytest.fixture()
async def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_maker(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture()
def market_data() -> StubMarketData:
    return StubMarketData()


@pytest.fixture()
def advisor() -> GeminiAdvisor:
    return GeminiAdvisor(api_key=None)


@pytest.fixture()
def app(session_maker, market_data, advisor) -> FastAPI:
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    trackmint_app.dependency_overrides[get_db] = override_get_db
    trackmint_app.dependency_overrides[get_market_data] = lambda: market_data
    trackmint_app.dependency_overrides[get_advisor] = lambda: advisor
    yield trackmint_app
    trackmint_app.dependency_overrides.clear()


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
async def user_headers(client: AsyncClient) -> Dict[str, str]:
    """Registers a user and returns the identity header for it"""
    response = await client.post(
        "/api/v1/users",
        json={
            "email": "asha@example.com",
            "first_name": "Asha",
            "last_name": "Rao",
            "monthly_income": 50000,
            "budget_rule": "50-30-20",
            "risk_appetite": "moderate",
        },
    )
    assert response.status_code == 201, response.text
    return {"X-User-Id": str(response.json()["id"])}
