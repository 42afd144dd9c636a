"""
Goal API Routes
Savings goals, contributions and progress stats
"""

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.api.deps import get_current_user_id
from trackmint.domain.errors import DomainError
from trackmint.domain.models import GoalCategory, GoalStatus
from trackmint.domain.schemas.goals import (
    ContributionRequest,
    ContributionResponse,
    GoalCreateRequest,
    GoalResponse,
    GoalStatsResponse,
    GoalUpdateRequest,
    MilestoneSchema,
)
from trackmint.infrastructure.db.database import get_db
from trackmint.services.goal_service import GoalService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=GoalResponse, status_code=201)
async def create_goal(
    request: GoalCreateRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return GoalResponse.model_validate(await GoalService(db).create(user_id, request))
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to create goal: {e}")
        raise HTTPException(status_code=500, detail="Failed to create goal")


@router.get("", response_model=List[GoalResponse])
async def list_goals(
    status: Optional[GoalStatus] = None,
    category: Optional[GoalCategory] = None,
    sort_by: Literal["created_at", "target_date", "target_amount", "current_amount", "priority"] = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        goals = await GoalService(db).list(
            user_id, status=status, category=category, sort_by=sort_by, sort_order=sort_order
        )
        return [GoalResponse.model_validate(g) for g in goals]
    except Exception as e:
        logger.exception(f"Failed to list goals: {e}")
        raise HTTPException(status_code=500, detail="Failed to list goals")


@router.get("/stats", response_model=GoalStatsResponse)
async def goal_stats(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return GoalStatsResponse.model_validate(await GoalService(db).stats(user_id))
    except Exception as e:
        logger.exception(f"Failed to compute goal stats: {e}")
        raise HTTPException(status_code=500, detail="Failed to compute goal stats")


@router.get("/{goal_id}", response_model=GoalResponse)
async def get_goal(
    goal_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return GoalResponse.model_validate(await GoalService(db).get(user_id, goal_id))
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to load goal {goal_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load goal")


@router.put("/{goal_id}", response_model=GoalResponse)
async def update_goal(
    goal_id: int,
    request: GoalUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return GoalResponse.model_validate(await GoalService(db).update(user_id, goal_id, request))
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to update goal {goal_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update goal")


@router.delete("/{goal_id}", status_code=204)
async def delete_goal(
    goal_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        await GoalService(db).delete(user_id, goal_id)
        return Response(status_code=204)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to delete goal {goal_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete goal")


@router.post("/{goal_id}/contributions", response_model=ContributionResponse)
async def contribute(
    goal_id: int,
    request: ContributionRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Add money; completes the goal once the target is reached"""
    try:
        goal, achieved = await GoalService(db).contribute(
            user_id, goal_id, request.amount, note=request.note
        )
        return ContributionResponse(
            goal=GoalResponse.model_validate(goal),
            achieved_milestones=[MilestoneSchema.model_validate(m) for m in achieved],
        )
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to contribute to goal {goal_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to add contribution")
