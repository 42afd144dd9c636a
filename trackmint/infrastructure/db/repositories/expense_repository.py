"""
Expense Repository
CRUD, filtered listing and aggregate queries for expenses
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import extract, func, select
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from trackmint.domain.models import Expense, ExpenseCategory
from trackmint.infrastructure.db.models import ExpenseModel

SORT_COLUMNS = {
    "date": ExpenseModel.date,
    "amount": ExpenseModel.amount,
    "created_at": ExpenseModel.created_at,
}


class ExpenseRepository:
    """Repository for Expense"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def get(self, user_id: int, expense_id: int) -> Optional[Expense]:
        model = await self._get_model(user_id, expense_id)
        return self._to_domain(model) if model else None

    async def save(self, expense: Expense) -> Expense:
        if expense.id is None:
            model = ExpenseModel(user_id=expense.user_id)
            self.session.add(model)
        else:
            model = await self._get_model(expense.user_id, expense.id)

        model.title = expense.title
        model.amount = expense.amount
        model.category = expense.category
        model.subcategory = expense.subcategory
        model.description = expense.description
        model.date = expense.date
        model.is_recurring = expense.is_recurring
        model.recurring_frequency = expense.recurring_frequency
        model.payment_method = expense.payment_method
        model.tags = list(expense.tags)
        model.receipt_url = expense.receipt_url
        model.receipt_filename = expense.receipt_filename
        model.is_planned = expense.is_planned

        await self.session.flush()
        return self._to_domain(model)

    async def delete(self, user_id: int, expense_id: int) -> bool:
        model = await self._get_model(user_id, expense_id)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.flush()
        return True

    async def list_page(
        self,
        user_id: int,
        category: Optional[ExpenseCategory] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        sort_by: str = "date",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Expense], int]:
        """
        One page of a user's expenses

        Returns:
            (expenses on the page, total matching rows)
        """
        conditions = [ExpenseModel.user_id == user_id]
        if category is not None:
            conditions.append(ExpenseModel.category == category)
        if start_date is not None:
            conditions.append(ExpenseModel.date >= start_date)
        if end_date is not None:
            conditions.append(ExpenseModel.date <= end_date)

        total = await self.session.scalar(
            select(func.count(ExpenseModel.id)).where(*conditions)
        )

        column = SORT_COLUMNS.get(sort_by, ExpenseModel.date)
        if sort_order == "asc":
            ordering = (column.asc(), ExpenseModel.id.asc())
        else:
            ordering = (column.desc(), ExpenseModel.id.desc())

        result = await self.session.execute(
            select(ExpenseModel)
            .where(*conditions)
            .order_by(*ordering)
            .limit(limit)
            .offset((page - 1) * limit)
        )
        return [self._to_domain(m) for m in result.scalars().all()], int(total or 0)

    async def list_between(self, user_id: int, start: datetime, end: datetime) -> List[Expense]:
        result = await self.session.execute(
            select(ExpenseModel)
            .where(
                ExpenseModel.user_id == user_id,
                ExpenseModel.date >= start,
                ExpenseModel.date <= end,
            )
            .order_by(ExpenseModel.date)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def category_totals(self, user_id: int, start: datetime, end: datetime) -> List[Dict]:
        """Per-category total / count / average, largest total first"""
        total_amount = func.sum(ExpenseModel.amount)
        result = await self.session.execute(
            select(
                ExpenseModel.category,
                total_amount.label("total_amount"),
                func.count(ExpenseModel.id).label("count"),
                func.avg(ExpenseModel.amount).label("avg_amount"),
            )
            .where(
                ExpenseModel.user_id == user_id,
                ExpenseModel.date >= start,
                ExpenseModel.date <= end,
            )
            .group_by(ExpenseModel.category)
            .order_by(total_amount.desc())
        )
        return [
            {
                "category": row.category,
                "total_amount": float(row.total_amount or 0),
                "count": int(row.count),
                "avg_amount": float(row.avg_amount or 0),
            }
            for row in result.all()
        ]

    async def period_total(self, user_id: int, start: datetime, end: datetime) -> Tuple[float, int]:
        result = await self.session.execute(
            select(func.sum(ExpenseModel.amount), func.count(ExpenseModel.id)).where(
                ExpenseModel.user_id == user_id,
                ExpenseModel.date >= start,
                ExpenseModel.date <= end,
            )
        )
        total, count = result.one()
        return float(total or 0), int(count or 0)

    async def monthly_trend(self, user_id: int, start: datetime, end: datetime) -> List[Dict]:
        """Totals grouped by (year, month), oldest first"""
        year = extract("year", ExpenseModel.date)
        month = extract("month", ExpenseModel.date)
        result = await self.session.execute(
            select(
                year.label("year"),
                month.label("month"),
                func.sum(ExpenseModel.amount).label("total_amount"),
                func.count(ExpenseModel.id).label("count"),
            )
            .where(
                ExpenseModel.user_id == user_id,
                ExpenseModel.date >= start,
                ExpenseModel.date <= end,
            )
            .group_by(year, month)
            .order_by(year, month)
        )
        return [
            {
                "year": int(row.year),
                "month": int(row.month),
                "total_amount": float(row.total_amount or 0),
                "count": int(row.count),
            }
            for row in result.all()
        ]

    async def _get_model(self, user_id: int, expense_id: int) -> Optional[ExpenseModel]:
        result = await self.session.execute(
            select(ExpenseModel).where(
                ExpenseModel.id == expense_id,
                ExpenseModel.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: ExpenseModel) -> Expense:
        return Expense(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            amount=model.amount,
            category=model.category,
            subcategory=model.subcategory,
            description=model.description,
            date=model.date,
            is_recurring=model.is_recurring,
            recurring_frequency=model.recurring_frequency,
            payment_method=model.payment_method,
            tags=list(model.tags or []),
            receipt_url=model.receipt_url,
            receipt_filename=model.receipt_filename,
            is_planned=model.is_planned,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
