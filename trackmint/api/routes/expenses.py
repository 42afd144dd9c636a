"""
Expense API Routes
Log, browse and summarise spending
"""

import logging
from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.api.deps import get_current_user_id
from trackmint.domain.errors import DomainError
from trackmint.domain.models import ExpenseCategory
from trackmint.domain.schemas.expenses import (
    ExpenseCreateRequest,
    ExpenseListResponse,
    ExpenseResponse,
    ExpenseStatsResponse,
    ExpenseUpdateRequest,
)
from trackmint.infrastructure.db.database import get_db
from trackmint.services.expense_service import ExpenseService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=ExpenseResponse, status_code=201)
async def create_expense(
    request: ExpenseCreateRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        expense = await ExpenseService(db).create(user_id, request)
        return ExpenseResponse.model_validate(expense)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to create expense: {e}")
        raise HTTPException(status_code=500, detail="Failed to create expense")


@router.get("", response_model=ExpenseListResponse)
async def list_expenses(
    category: Optional[ExpenseCategory] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    sort_by: Literal["date", "amount", "created_at"] = "date",
    sort_order: Literal["asc", "desc"] = "desc",
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Paginated expense list

    Filters: category, start_date / end_date (inclusive)
    """
    try:
        items, pagination = await ExpenseService(db).list(
            user_id,
            category=category,
            start_date=start_date,
            end_date=end_date,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit,
        )
        return ExpenseListResponse(
            expenses=[ExpenseResponse.model_validate(e) for e in items],
            pagination=pagination,
        )
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to list expenses: {e}")
        raise HTTPException(status_code=500, detail="Failed to list expenses")


@router.get("/stats", response_model=ExpenseStatsResponse)
async def expense_stats(
    period: Literal["week", "month", "year"] = "month",
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return ExpenseStatsResponse(**await ExpenseService(db).stats(user_id, period))
    except Exception as e:
        logger.exception(f"Failed to compute expense stats: {e}")
        raise HTTPException(status_code=500, detail="Failed to compute expense stats")


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return ExpenseResponse.model_validate(await ExpenseService(db).get(user_id, expense_id))
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to load expense {expense_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load expense")


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: int,
    request: ExpenseUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        expense = await ExpenseService(db).update(user_id, expense_id, request)
        return ExpenseResponse.model_validate(expense)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to update expense {expense_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update expense")


@router.delete("/{expense_id}", status_code=204)
async def delete_expense(
    expense_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        await ExpenseService(db).delete(user_id, expense_id)
        return Response(status_code=204)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to delete expense {expense_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete expense")
