"""
GOAL TRACKER

Applies contributions to a savings goal and keeps milestones current.

RULES:
- Contributions are append-only positive amounts
- Completion is one-way: current >= target flips status to completed
- Milestones are checked in stored order, each achieved at most once
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from trackmint.domain.errors import InactiveGoalError, InvalidContribution
from trackmint.domain.models import (
    CategoryProgress,
    Contribution,
    Goal,
    GoalStats,
    GoalStatus,
    Milestone,
)
from trackmint.utils.time import now_local_naive

logger = logging.getLogger(__name__)

DEFAULT_MILESTONE_PERCENTAGES: Sequence[float] = (25, 50, 75, 100)


def default_milestones(target_amount: float) -> List[Milestone]:
    """Quartile milestones with amount = target * pct / 100."""
    return [
        Milestone(percentage=pct, amount=target_amount * pct / 100)
        for pct in DEFAULT_MILESTONE_PERCENTAGES
    ]


class GoalTracker:
    """
    Goal Tracker
    Wraps one Goal; every contribution goes through here.
    """

    def __init__(self, goal: Goal):
        self.goal = goal

    def add_contribution(
        self,
        amount: float,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Contribution:
        """
        Record a contribution, complete the goal if reached, then update milestones.

        Raises:
            InvalidContribution: amount <= 0
            InactiveGoalError: goal status is not active
        """
        if amount <= 0:
            raise InvalidContribution("Contribution amount must be greater than 0")
        if self.goal.status != GoalStatus.ACTIVE:
            raise InactiveGoalError("Cannot contribute to inactive goal")

        now = now or now_local_naive()
        contribution = Contribution(amount=amount, date=now, note=note)
        self.goal.contributions.append(contribution)
        self.goal.current_amount += amount

        if self.goal.current_amount >= self.goal.target_amount:
            self.goal.status = GoalStatus.COMPLETED
            logger.info(f"🎯 Goal '{self.goal.title}' completed at {self.goal.current_amount}")

        self.update_milestones(now)
        return contribution

    def update_milestones(self, now: Optional[datetime] = None) -> List[Milestone]:
        """Mark milestones reached by current progress. Returns the newly achieved ones."""
        now = now or now_local_naive()
        progress = self.goal.progress_percentage
        achieved: List[Milestone] = []
        for milestone in self.goal.milestones:
            if not milestone.achieved and progress >= milestone.percentage:
                milestone.achieved = True
                milestone.achieved_date = now
                achieved.append(milestone)
                logger.info(f"🏁 Goal '{self.goal.title}' reached {milestone.percentage}% milestone")
        return achieved

    def retarget(self, target_amount: float) -> None:
        """
        Change the target and rescale milestone amounts.

        achieved flags are left as they are.
        """
        self.goal.target_amount = target_amount
        for milestone in self.goal.milestones:
            milestone.amount = target_amount * milestone.percentage / 100


def summarize_goals(goals: Iterable[Goal]) -> GoalStats:
    goals = list(goals)
    breakdown = {}
    for goal in goals:
        key = goal.category.value
        slot = breakdown.get(key, CategoryProgress(0, 0.0, 0.0))
        breakdown[key] = CategoryProgress(
            count=slot.count + 1,
            total_target=slot.total_target + goal.target_amount,
            total_current=slot.total_current + goal.current_amount,
        )

    return GoalStats(
        total_goals=len(goals),
        active_goals=sum(1 for g in goals if g.status == GoalStatus.ACTIVE),
        completed_goals=sum(1 for g in goals if g.status == GoalStatus.COMPLETED),
        paused_goals=sum(1 for g in goals if g.status == GoalStatus.PAUSED),
        total_target=sum(g.target_amount for g in goals),
        total_current=sum(g.current_amount for g in goals),
        total_remaining=sum(g.remaining_amount for g in goals),
        average_progress=(
            sum(g.progress_percentage for g in goals) / len(goals) if goals else 0.0
        ),
        category_breakdown=breakdown,
    )
