"""
Budget API Routes
Rule-based income split and this month's spending per bucket
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.api.deps import get_current_user_id
from trackmint.domain.errors import DomainError
from trackmint.domain.schemas.advisory import (
    BucketStatusSchema,
    BudgetAllocationResponse,
    BudgetStatusResponse,
    SavingsStatusSchema,
)
from trackmint.domain.schemas.users import BudgetAllocationSchema
from trackmint.infrastructure.db.database import get_db
from trackmint.services.budget_service import BudgetService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/allocation", response_model=BudgetAllocationResponse)
async def get_allocation(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        profile, allocation = await BudgetService(db).allocation(user_id)
        return BudgetAllocationResponse(
            monthly_income=profile.monthly_income,
            budget_rule=profile.budget_rule,
            allocation=BudgetAllocationSchema.model_validate(allocation),
        )
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to compute allocation: {e}")
        raise HTTPException(status_code=500, detail="Failed to compute allocation")


@router.get("/status", response_model=BudgetStatusResponse)
async def get_status(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Month-to-date spend vs allocation; savings spend counts as invested"""
    try:
        profile, status = await BudgetService(db).status(user_id)
        return BudgetStatusResponse(
            month=status.month,
            monthly_income=profile.monthly_income,
            budget_rule=profile.budget_rule,
            allocation=BudgetAllocationSchema.model_validate(status.allocation),
            needs=BucketStatusSchema.model_validate(status.needs),
            wants=BucketStatusSchema.model_validate(status.wants),
            savings=SavingsStatusSchema(
                allocated=status.savings.allocated,
                invested=status.savings.spent,
                remaining=status.savings.remaining,
                percentage=status.savings.percentage,
            ),
        )
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to compute budget status: {e}")
        raise HTTPException(status_code=500, detail="Failed to compute budget status")
