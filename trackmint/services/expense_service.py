"""
Expense Service
Expense CRUD, paginated listing and period statistics
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.domain.errors import DomainError, NotFoundError
from trackmint.domain.models import Expense, ExpenseCategory
from trackmint.domain.models.categories import expense_category_for_bucket
from trackmint.domain.schemas.expenses import ExpenseCreateRequest, ExpenseUpdateRequest
from trackmint.infrastructure.db.repositories.expense_repository import ExpenseRepository
from trackmint.utils.time import as_db_naive, month_start, now_local_naive, shift_months

logger = logging.getLogger(__name__)

STATS_PERIODS = ("week", "month", "year")
TREND_MONTHS = 6


def period_start(period: str, now: datetime) -> datetime:
    """week: 7 days back from today; month / year: calendar start. Unknown -> month."""
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "week":
        return today - timedelta(days=7)
    if period == "year":
        return today.replace(month=1, day=1)
    return month_start(now)


class ExpenseService:
    def __init__(self, session: AsyncSession):
        self.expenses = ExpenseRepository(session)

    async def create(self, user_id: int, request: ExpenseCreateRequest) -> Expense:
        category = request.category
        subcategory = request.subcategory
        if category is None:
            # Client bucket -> backend category; the bucket survives as subcategory
            category = expense_category_for_bucket(request.bucket.value)
            subcategory = subcategory or request.bucket.value

        expense = Expense(
            user_id=user_id,
            title=request.title.strip(),
            amount=request.amount,
            category=category,
            subcategory=subcategory,
            description=request.description,
            date=as_db_naive(request.date) if request.date else now_local_naive(),
            is_recurring=request.is_recurring,
            recurring_frequency=request.recurring_frequency,
            payment_method=request.payment_method,
            tags=list(request.tags),
            receipt_url=request.receipt_url,
            receipt_filename=request.receipt_filename,
            is_planned=request.is_planned,
        )
        saved = await self.expenses.save(expense)
        logger.info(f"🧾 Expense {saved.id} logged: {saved.amount} in {saved.category.value}")
        return saved

    async def get(self, user_id: int, expense_id: int) -> Expense:
        expense = await self.expenses.get(user_id, expense_id)
        if expense is None:
            raise NotFoundError("Expense", expense_id)
        return expense

    async def update(self, user_id: int, expense_id: int, request: ExpenseUpdateRequest) -> Expense:
        expense = await self.get(user_id, expense_id)
        for field, value in request.model_dump(exclude_unset=True).items():
            if field == "date" and value is not None:
                value = as_db_naive(value)
            if value is None and field in ("title", "amount", "category", "date",
                                           "payment_method", "tags", "is_recurring", "is_planned"):
                continue
            setattr(expense, field, value)

        if expense.is_recurring and expense.recurring_frequency is None:
            raise DomainError("recurring_frequency is required for recurring expenses")
        return await self.expenses.save(expense)

    async def delete(self, user_id: int, expense_id: int) -> None:
        if not await self.expenses.delete(user_id, expense_id):
            raise NotFoundError("Expense", expense_id)

    async def list(
        self,
        user_id: int,
        category: Optional[ExpenseCategory] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        sort_by: str = "date",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Expense], Dict]:
        items, total = await self.expenses.list_page(
            user_id,
            category=category,
            start_date=as_db_naive(start_date) if start_date else None,
            end_date=as_db_naive(end_date) if end_date else None,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit,
        )
        total_pages = math.ceil(total / limit) if limit else 0
        pagination = {
            "current_page": page,
            "total_pages": total_pages,
            "total_items": total,
            "has_next": page < total_pages,
            "has_prev": page > 1,
        }
        return items, pagination

    async def stats(self, user_id: int, period: str = "month", now: Optional[datetime] = None) -> Dict:
        now = now or now_local_naive()
        start = period_start(period, now)
        category_stats = await self.expenses.category_totals(user_id, start, now)
        total_amount, total_count = await self.expenses.period_total(user_id, start, now)
        trend = await self.expenses.monthly_trend(
            user_id, shift_months(now, -(TREND_MONTHS - 1)), now
        )
        return {
            "period": period if period in STATS_PERIODS else "month",
            "start_date": start,
            "end_date": now,
            "category_stats": category_stats,
            "total_amount": total_amount,
            "total_count": total_count,
            "monthly_trend": trend,
        }
