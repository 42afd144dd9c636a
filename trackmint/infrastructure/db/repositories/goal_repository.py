"""
Goal Repository
Goals with contributions (append-only) and milestones
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import case, select
from typing import Dict, List, Optional

from trackmint.domain.errors import NotFoundError
from trackmint.domain.models import (
    Contribution,
    Goal,
    GoalCategory,
    GoalPriority,
    GoalStatus,
    Milestone,
)
from trackmint.infrastructure.db.models import (
    GoalContributionModel,
    GoalMilestoneModel,
    GoalModel,
)

_PRIORITY_RANK = case(
    (GoalModel.priority == GoalPriority.LOW, 1),
    (GoalModel.priority == GoalPriority.MEDIUM, 2),
    else_=3,
)

SORT_COLUMNS = {
    "created_at": GoalModel.created_at,
    "target_date": GoalModel.target_date,
    "target_amount": GoalModel.target_amount,
    "current_amount": GoalModel.current_amount,
    "priority": _PRIORITY_RANK,
}


class GoalRepository:
    """Repository for Goal"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def get(self, user_id: int, goal_id: int) -> Optional[Goal]:
        model = await self._get_model(user_id, goal_id)
        return self._to_domain(model) if model else None

    async def list_for_user(
        self,
        user_id: int,
        status: Optional[GoalStatus] = None,
        category: Optional[GoalCategory] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> List[Goal]:
        """
        List a user's goals

        Args:
            user_id: Owner
            status: Optional status filter
            category: Optional category filter
            sort_by: One of SORT_COLUMNS
            sort_order: asc or desc
        """
        query = select(GoalModel).where(GoalModel.user_id == user_id)
        if status is not None:
            query = query.where(GoalModel.status == status)
        if category is not None:
            query = query.where(GoalModel.category == category)

        column = SORT_COLUMNS.get(sort_by, GoalModel.created_at)
        if sort_order == "asc":
            query = query.order_by(column.asc(), GoalModel.id.asc())
        else:
            query = query.order_by(column.desc(), GoalModel.id.desc())
        result = await self.session.execute(query)
        return [self._to_domain(m) for m in result.scalars().all()]

    async def save(self, goal: Goal) -> Goal:
        if goal.id is None:
            model = GoalModel(user_id=goal.user_id, contributions=[], milestones=[])
            self.session.add(model)
        else:
            model = await self._get_model(goal.user_id, goal.id)
            if model is None:
                raise NotFoundError("Goal", goal.id)

        model.title = goal.title
        model.description = goal.description
        model.target_amount = goal.target_amount
        model.current_amount = goal.current_amount
        model.category = goal.category
        model.priority = goal.priority
        model.target_date = goal.target_date
        model.start_date = goal.start_date
        model.status = goal.status
        model.monthly_contribution = goal.monthly_contribution
        model.auto_contribute = goal.auto_contribute
        model.tags = list(goal.tags)

        position = len(model.contributions)
        for contribution in goal.contributions:
            if contribution.id is not None:
                continue
            model.contributions.append(
                GoalContributionModel(
                    position=position,
                    amount=contribution.amount,
                    date=contribution.date,
                    note=contribution.note,
                )
            )
            position += 1

        self._sync_milestones(model, goal.milestones)

        await self.session.flush()
        return self._to_domain(model)

    async def delete(self, user_id: int, goal_id: int) -> bool:
        model = await self._get_model(user_id, goal_id)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.flush()
        return True

    async def _get_model(self, user_id: int, goal_id: int) -> Optional[GoalModel]:
        result = await self.session.execute(
            select(GoalModel).where(GoalModel.id == goal_id, GoalModel.user_id == user_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _sync_milestones(model: GoalModel, milestones: List[Milestone]) -> None:
        stored: Dict[int, GoalMilestoneModel] = {m.id: m for m in model.milestones}
        position = len(model.milestones)
        for milestone in milestones:
            if milestone.id is not None and milestone.id in stored:
                row = stored[milestone.id]
            else:
                row = GoalMilestoneModel(position=position, percentage=milestone.percentage)
                model.milestones.append(row)
                position += 1
            row.amount = milestone.amount
            row.achieved = milestone.achieved
            row.achieved_date = milestone.achieved_date
            row.reward = milestone.reward

    @staticmethod
    def _to_domain(model: GoalModel) -> Goal:
        return Goal(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            description=model.description,
            target_amount=model.target_amount,
            current_amount=model.current_amount,
            category=model.category,
            priority=model.priority,
            target_date=model.target_date,
            start_date=model.start_date,
            status=model.status,
            monthly_contribution=model.monthly_contribution,
            auto_contribute=model.auto_contribute,
            contributions=[
                Contribution(id=c.id, amount=c.amount, date=c.date, note=c.note)
                for c in model.contributions
            ],
            milestones=[
                Milestone(
                    id=m.id,
                    percentage=m.percentage,
                    amount=m.amount,
                    achieved=m.achieved,
                    achieved_date=m.achieved_date,
                    reward=m.reward,
                )
                for m in model.milestones
            ],
            tags=list(model.tags or []),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
