"""
Goal Service
Savings goals, contributions and milestone tracking
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.domain.errors import NotFoundError
from trackmint.domain.models import (
    Goal,
    GoalCategory,
    GoalStats,
    GoalStatus,
    Milestone,
)
from trackmint.domain.schemas.goals import GoalCreateRequest, GoalUpdateRequest
from trackmint.domain.services.goal_tracker import GoalTracker, default_milestones, summarize_goals
from trackmint.infrastructure.db.repositories.goal_repository import GoalRepository
from trackmint.utils.time import as_db_naive, now_local_naive

logger = logging.getLogger(__name__)


class GoalService:
    def __init__(self, session: AsyncSession):
        self.goals = GoalRepository(session)

    async def create(self, user_id: int, request: GoalCreateRequest) -> Goal:
        if request.milestones:
            milestones = [
                Milestone(
                    percentage=m.percentage,
                    amount=request.target_amount * m.percentage / 100,
                    reward=m.reward,
                )
                for m in request.milestones
            ]
        else:
            milestones = default_milestones(request.target_amount)

        goal = Goal(
            user_id=user_id,
            title=request.title.strip(),
            description=request.description,
            target_amount=request.target_amount,
            current_amount=request.current_amount,
            category=request.category,
            priority=request.priority,
            target_date=as_db_naive(request.target_date),
            start_date=as_db_naive(request.start_date) if request.start_date else now_local_naive(),
            monthly_contribution=request.monthly_contribution,
            auto_contribute=request.auto_contribute,
            milestones=milestones,
            tags=list(request.tags),
        )
        # An opening balance may already cover some milestones
        GoalTracker(goal).update_milestones()

        saved = await self.goals.save(goal)
        logger.info(f"🎯 Goal {saved.id} created for user {user_id}: {saved.title}")
        return saved

    async def list(
        self,
        user_id: int,
        status: Optional[GoalStatus] = None,
        category: Optional[GoalCategory] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> List[Goal]:
        return await self.goals.list_for_user(
            user_id, status=status, category=category, sort_by=sort_by, sort_order=sort_order
        )

    async def get(self, user_id: int, goal_id: int) -> Goal:
        goal = await self.goals.get(user_id, goal_id)
        if goal is None:
            raise NotFoundError("Goal", goal_id)
        return goal

    async def update(self, user_id: int, goal_id: int, request: GoalUpdateRequest) -> Goal:
        goal = await self.get(user_id, goal_id)
        changes = request.model_dump(exclude_unset=True)

        target_amount = changes.pop("target_amount", None)
        if target_amount is not None:
            GoalTracker(goal).retarget(target_amount)

        for field, value in changes.items():
            if value is None and field not in ("description", "monthly_contribution"):
                continue
            if field == "target_date":
                value = as_db_naive(value)
            setattr(goal, field, value)
        return await self.goals.save(goal)

    async def delete(self, user_id: int, goal_id: int) -> None:
        if not await self.goals.delete(user_id, goal_id):
            raise NotFoundError("Goal", goal_id)

    async def contribute(
        self, user_id: int, goal_id: int, amount: float, note: Optional[str] = None
    ) -> Tuple[Goal, List[Milestone]]:
        """
        Add money to a goal.

        Returns:
            (saved goal, milestones achieved by this contribution)
        """
        goal = await self.get(user_id, goal_id)
        pending = [i for i, m in enumerate(goal.milestones) if not m.achieved]
        GoalTracker(goal).add_contribution(amount, note=note)

        saved = await self.goals.save(goal)
        return saved, [saved.milestones[i] for i in pending if saved.milestones[i].achieved]

    async def stats(self, user_id: int) -> GoalStats:
        return summarize_goals(await self.goals.list_for_user(user_id))
