"""
Portfolio Service
Holdings, transactions, prices, watchlist and alerts for one user
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.domain.errors import (
    ConflictError,
    InvalidTransaction,
    MarketDataUnavailable,
    NotFoundError,
)
from trackmint.domain.models import Holding, PortfolioStats, PriceAlert, TransactionType
from trackmint.domain.schemas.portfolio import (
    AlertCreateRequest,
    HoldingCreateRequest,
    HoldingUpdateRequest,
    TransactionRequest,
)
from trackmint.domain.services.holding_ledger import QUANTITY_EPSILON, HoldingLedger
from trackmint.domain.services.portfolio_analytics import portfolio_stats
from trackmint.infrastructure.db.repositories.holding_repository import HoldingRepository
from trackmint.infrastructure.market_data.types import MarketDataProvider
from trackmint.utils.time import as_db_naive

logger = logging.getLogger(__name__)


class PortfolioService:
    def __init__(self, session: AsyncSession, market_data: Optional[MarketDataProvider] = None):
        self.holdings = HoldingRepository(session)
        self.market_data = market_data

    async def add(self, user_id: int, request: HoldingCreateRequest) -> Holding:
        if await self.holdings.get_by_symbol(user_id, request.symbol) is not None:
            raise ConflictError(
                f"{request.symbol} already exists in portfolio. Use update endpoint to modify."
            )

        holding = Holding(
            user_id=user_id,
            symbol=request.symbol,
            company_name=request.company_name.strip(),
            current_price=request.current_price,
            sector=request.sector,
            industry=request.industry,
            market_cap=request.market_cap,
            dividend_yield=request.dividend_yield,
            watchlist=request.watchlist or request.quantity == 0,
            tags=list(request.tags),
            notes=request.notes,
        )
        if request.quantity > 0:
            HoldingLedger(holding).add_transaction(
                TransactionType.BUY,
                request.quantity,
                request.average_buy_price,
                note="Initial purchase",
            )

        saved = await self.holdings.save(holding)
        logger.info(f"📈 Added {saved.symbol} for user {user_id} (qty={saved.quantity})")
        return saved

    async def list(self, user_id: int, include_watchlist: bool = False) -> List[Holding]:
        return await self.holdings.list_for_user(user_id, include_watchlist=include_watchlist)

    async def get(self, user_id: int, holding_id: int) -> Holding:
        holding = await self.holdings.get(user_id, holding_id)
        if holding is None:
            raise NotFoundError("Portfolio item", holding_id)
        return holding

    async def update(self, user_id: int, holding_id: int, request: HoldingUpdateRequest) -> Holding:
        holding = await self.get(user_id, holding_id)
        for field, value in request.model_dump(exclude_unset=True).items():
            if field in ("company_name", "tags") and value is None:
                continue
            setattr(holding, field, value)
        return await self.holdings.save(holding)

    async def remove(self, user_id: int, holding_id: int) -> None:
        if not await self.holdings.delete(user_id, holding_id):
            raise NotFoundError("Portfolio item", holding_id)
        logger.info(f"🗑️ Removed holding {holding_id} for user {user_id}")

    async def add_transaction(
        self, user_id: int, holding_id: int, request: TransactionRequest
    ) -> Holding:
        holding = await self.get(user_id, holding_id)
        oversell = request.quantity > holding.quantity + QUANTITY_EPSILON
        if request.type == TransactionType.SELL and oversell:
            raise InvalidTransaction("Cannot sell more shares than owned")

        HoldingLedger(holding).add_transaction(
            request.type,
            request.quantity,
            request.price,
            fees=request.fees,
            date=as_db_naive(request.date) if request.date else None,
            note=request.note,
        )
        return await self.holdings.save(holding)

    async def set_price(
        self, user_id: int, holding_id: int, price: float
    ) -> Tuple[Holding, List[PriceAlert]]:
        holding = await self.get(user_id, holding_id)
        fired = HoldingLedger(holding).update_price(price)
        saved = await self.holdings.save(holding)
        return saved, fired

    async def refresh_price(
        self, user_id: int, holding_id: int
    ) -> Tuple[Holding, List[PriceAlert], Optional[str]]:
        """Fetch a live quote through the configured providers and apply it"""
        holding = await self.get(user_id, holding_id)
        if self.market_data is None:
            raise MarketDataUnavailable("No market data provider is configured")

        quote = await self.market_data.get_quote(holding.symbol)
        if quote is None:
            logger.warning("Live price missing for %s", holding.symbol)
            raise MarketDataUnavailable(f"No live quote available for {holding.symbol}")

        source = None
        if hasattr(self.market_data, "get_last_sources"):
            source = self.market_data.get_last_sources()["quotes"].get(holding.symbol)

        fired = HoldingLedger(holding).update_price(quote.price)
        saved = await self.holdings.save(holding)
        return saved, fired, source

    async def toggle_watchlist(self, user_id: int, holding_id: int) -> Holding:
        holding = await self.get(user_id, holding_id)
        holding.watchlist = not holding.watchlist
        return await self.holdings.save(holding)

    async def watchlist(self, user_id: int) -> List[Holding]:
        return await self.holdings.list_watchlist(user_id)

    async def add_alert(self, user_id: int, holding_id: int, request: AlertCreateRequest) -> Holding:
        holding = await self.get(user_id, holding_id)
        holding.alerts.append(PriceAlert(type=request.type, value=request.value))
        return await self.holdings.save(holding)

    async def set_alert_active(
        self, user_id: int, holding_id: int, alert_id: int, active: bool
    ) -> Holding:
        holding = await self.get(user_id, holding_id)
        alert = next((a for a in holding.alerts if a.id == alert_id), None)
        if alert is None:
            raise NotFoundError("Alert", alert_id)
        alert.active = active
        return await self.holdings.save(holding)

    async def stats(self, user_id: int) -> PortfolioStats:
        return portfolio_stats(await self.holdings.list_for_user(user_id))
