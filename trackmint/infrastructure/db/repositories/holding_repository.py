"""
Holding Repository
Holdings with their transaction history and alerts.

Transactions are append-only: save() inserts transactions that have no id
yet and never rewrites stored ones.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from typing import Dict, List, Optional

from trackmint.domain.errors import ConflictError, NotFoundError
from trackmint.domain.models import Holding, PriceAlert, Transaction
from trackmint.infrastructure.db.models import (
    HoldingAlertModel,
    HoldingModel,
    HoldingTransactionModel,
)


class HoldingRepository:
    """Repository for Holding"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def get(self, user_id: int, holding_id: int) -> Optional[Holding]:
        """
        Get a holding scoped to its owner

        Returns:
            Holding or None when the (user, id) pair does not exist
        """
        model = await self._get_model(user_id, holding_id)
        return self._to_domain(model) if model else None

    async def get_by_symbol(self, user_id: int, symbol: str) -> Optional[Holding]:
        result = await self.session.execute(
            select(HoldingModel).where(
                HoldingModel.user_id == user_id,
                HoldingModel.symbol == symbol.strip().upper(),
            )
        )
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def list_for_user(self, user_id: int, include_watchlist: bool = False) -> List[Holding]:
        """
        Owned holdings (quantity > 0) sorted by symbol; watchlist-only
        entries are included on request.
        """
        query = select(HoldingModel).where(HoldingModel.user_id == user_id)
        if not include_watchlist:
            query = query.where(HoldingModel.quantity > 0)
        result = await self.session.execute(query.order_by(HoldingModel.symbol))
        return [self._to_domain(m) for m in result.scalars().all()]

    async def list_watchlist(self, user_id: int) -> List[Holding]:
        result = await self.session.execute(
            select(HoldingModel)
            .where(HoldingModel.user_id == user_id, HoldingModel.watchlist.is_(True))
            .order_by(HoldingModel.symbol)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def save(self, holding: Holding) -> Holding:
        """
        Insert or update a holding.

        Raises:
            ConflictError: (user, symbol) already exists
            NotFoundError: the row was deleted since it was read
        """
        if holding.id is None:
            model = HoldingModel(
                user_id=holding.user_id,
                symbol=holding.symbol,
                transactions=[],
                alerts=[],
            )
            self.session.add(model)
        else:
            model = await self._get_model(holding.user_id, holding.id)
            if model is None:
                raise NotFoundError("Portfolio item", holding.id)

        model.company_name = holding.company_name
        model.quantity = holding.quantity
        model.average_cost = holding.average_cost
        model.current_price = holding.current_price
        model.sector = holding.sector
        model.industry = holding.industry
        model.market_cap = holding.market_cap
        model.dividend_yield = holding.dividend_yield
        model.watchlist = holding.watchlist
        model.tags = list(holding.tags)
        model.notes = holding.notes
        model.last_updated = holding.last_updated

        self._append_transactions(model, holding.transactions)
        self._sync_alerts(model, holding.alerts)

        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                f"{holding.symbol} already exists in portfolio. Use update endpoint to modify."
            ) from exc

        return self._to_domain(model)

    async def delete(self, user_id: int, holding_id: int) -> bool:
        model = await self._get_model(user_id, holding_id)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.flush()
        return True

    # ------------------------------------------------------------------
    # INTERNAL HELPERS
    # ------------------------------------------------------------------

    async def _get_model(self, user_id: int, holding_id: int) -> Optional[HoldingModel]:
        result = await self.session.execute(
            select(HoldingModel).where(
                HoldingModel.id == holding_id,
                HoldingModel.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _append_transactions(model: HoldingModel, transactions: List[Transaction]) -> None:
        position = len(model.transactions)
        for tx in transactions:
            if tx.id is not None:
                continue
            model.transactions.append(
                HoldingTransactionModel(
                    position=position,
                    type=tx.type,
                    quantity=tx.quantity,
                    price=tx.price,
                    fees=tx.fees,
                    date=tx.date,
                    note=tx.note,
                )
            )
            position += 1

    @staticmethod
    def _sync_alerts(model: HoldingModel, alerts: List[PriceAlert]) -> None:
        stored: Dict[int, HoldingAlertModel] = {a.id: a for a in model.alerts}
        position = len(model.alerts)
        for alert in alerts:
            if alert.id is not None and alert.id in stored:
                row = stored[alert.id]
            else:
                row = HoldingAlertModel(position=position, type=alert.type, value=alert.value)
                model.alerts.append(row)
                position += 1
            row.triggered = alert.triggered
            row.triggered_date = alert.triggered_date
            row.active = alert.active

    @staticmethod
    def _to_domain(model: HoldingModel) -> Holding:
        return Holding(
            id=model.id,
            user_id=model.user_id,
            symbol=model.symbol,
            company_name=model.company_name,
            quantity=model.quantity,
            average_cost=model.average_cost,
            current_price=model.current_price,
            sector=model.sector,
            industry=model.industry,
            market_cap=model.market_cap,
            dividend_yield=model.dividend_yield,
            transactions=[
                Transaction(
                    id=t.id,
                    type=t.type,
                    quantity=t.quantity,
                    price=t.price,
                    fees=t.fees,
                    date=t.date,
                    note=t.note,
                )
                for t in model.transactions
            ],
            alerts=[
                PriceAlert(
                    id=a.id,
                    type=a.type,
                    value=a.value,
                    triggered=a.triggered,
                    triggered_date=a.triggered_date,
                    active=a.active,
                )
                for a in model.alerts
            ],
            watchlist=model.watchlist,
            tags=list(model.tags or []),
            notes=model.notes,
            last_updated=model.last_updated,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
