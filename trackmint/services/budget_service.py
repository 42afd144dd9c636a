"""
Budget Service
Income allocation and month-to-date spending per bucket
"""

from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.domain.models import BudgetAllocation, UserProfile
from trackmint.domain.services.budget_allocator import BudgetStatus, allocate, budget_status
from trackmint.infrastructure.db.repositories.expense_repository import ExpenseRepository
from trackmint.services.profile_service import ProfileService
from trackmint.utils.time import month_start, now_local_naive


class BudgetService:
    def __init__(self, session: AsyncSession):
        self.profiles = ProfileService(session)
        self.expenses = ExpenseRepository(session)

    @staticmethod
    def allocation_for(profile: UserProfile) -> BudgetAllocation:
        return allocate(profile.monthly_income, profile.budget_rule, profile.custom_budget)

    async def allocation(self, user_id: int) -> Tuple[UserProfile, BudgetAllocation]:
        profile = await self.profiles.get(user_id)
        return profile, self.allocation_for(profile)

    async def status(
        self, user_id: int, now: Optional[datetime] = None
    ) -> Tuple[UserProfile, BudgetStatus]:
        """Current calendar month's spending against the user's allocation"""
        now = now or now_local_naive()
        profile, allocation = await self.allocation(user_id)
        start = month_start(now)
        expenses = await self.expenses.list_between(user_id, start, now)
        return profile, budget_status(allocation, expenses, start)
