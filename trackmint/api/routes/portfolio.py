"""
Portfolio API Routes
Holdings, transactions, prices, watchlist and alerts
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.api.deps import get_current_user_id, get_market_data
from trackmint.domain.errors import DomainError
from trackmint.domain.schemas.portfolio import (
    AlertCreateRequest,
    AlertSchema,
    AlertToggleRequest,
    HoldingCreateRequest,
    HoldingResponse,
    HoldingUpdateRequest,
    PortfolioStatsResponse,
    PriceUpdateRequest,
    PriceUpdateResponse,
    TransactionRequest,
)
from trackmint.infrastructure.db.database import get_db
from trackmint.services.portfolio_service import PortfolioService

logger = logging.getLogger(__name__)
router = APIRouter()


def _price_response(holding, fired, source=None) -> PriceUpdateResponse:
    return PriceUpdateResponse(
        holding=HoldingResponse.model_validate(holding),
        triggered_alerts=[AlertSchema.model_validate(a) for a in fired],
        source=source,
    )


@router.post("", response_model=HoldingResponse, status_code=201)
async def add_holding(
    request: HoldingCreateRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Add a symbol

    quantity > 0 records an "Initial purchase" buy; quantity == 0 adds a watchlist entry.
    """
    try:
        holding = await PortfolioService(db).add(user_id, request)
        return HoldingResponse.model_validate(holding)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to add holding: {e}")
        raise HTTPException(status_code=500, detail="Failed to add holding")


@router.get("", response_model=List[HoldingResponse])
async def list_holdings(
    include_watchlist: bool = False,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        holdings = await PortfolioService(db).list(user_id, include_watchlist=include_watchlist)
        return [HoldingResponse.model_validate(h) for h in holdings]
    except Exception as e:
        logger.exception(f"Failed to list holdings: {e}")
        raise HTTPException(status_code=500, detail="Failed to list holdings")


@router.get("/stats", response_model=PortfolioStatsResponse)
async def portfolio_stats(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return PortfolioStatsResponse.model_validate(await PortfolioService(db).stats(user_id))
    except Exception as e:
        logger.exception(f"Failed to compute portfolio stats: {e}")
        raise HTTPException(status_code=500, detail="Failed to compute portfolio stats")


@router.get("/watchlist", response_model=List[HoldingResponse])
async def list_watchlist(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return [HoldingResponse.model_validate(h) for h in await PortfolioService(db).watchlist(user_id)]
    except Exception as e:
        logger.exception(f"Failed to list watchlist: {e}")
        raise HTTPException(status_code=500, detail="Failed to list watchlist")


@router.get("/{holding_id}", response_model=HoldingResponse)
async def get_holding(
    holding_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return HoldingResponse.model_validate(await PortfolioService(db).get(user_id, holding_id))
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to load holding {holding_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load holding")


@router.put("/{holding_id}", response_model=HoldingResponse)
async def update_holding(
    holding_id: int,
    request: HoldingUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        holding = await PortfolioService(db).update(user_id, holding_id, request)
        return HoldingResponse.model_validate(holding)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to update holding {holding_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update holding")


@router.delete("/{holding_id}", status_code=204)
async def remove_holding(
    holding_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        await PortfolioService(db).remove(user_id, holding_id)
        return Response(status_code=204)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to remove holding {holding_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to remove holding")


@router.post("/{holding_id}/transactions", response_model=HoldingResponse)
async def add_transaction(
    holding_id: int,
    request: TransactionRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Record a buy or sell; quantity and average cost are recomputed from the full history"""
    try:
        holding = await PortfolioService(db).add_transaction(user_id, holding_id, request)
        return HoldingResponse.model_validate(holding)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to add transaction to {holding_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to add transaction")


@router.put("/{holding_id}/price", response_model=PriceUpdateResponse)
async def set_price(
    holding_id: int,
    request: PriceUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        holding, fired = await PortfolioService(db).set_price(user_id, holding_id, request.current_price)
        return _price_response(holding, fired, source="manual")
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to set price for {holding_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to set price")


@router.post("/{holding_id}/refresh-price", response_model=PriceUpdateResponse)
async def refresh_price(
    holding_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    market_data=Depends(get_market_data),
):
    """Pull a live quote; 503 when no provider can serve the symbol"""
    try:
        holding, fired, source = await PortfolioService(db, market_data).refresh_price(
            user_id, holding_id
        )
        return _price_response(holding, fired, source=source)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to refresh price for {holding_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to refresh price")


@router.post("/{holding_id}/watchlist", response_model=HoldingResponse)
async def toggle_watchlist(
    holding_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        holding = await PortfolioService(db).toggle_watchlist(user_id, holding_id)
        return HoldingResponse.model_validate(holding)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to toggle watchlist for {holding_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to toggle watchlist")


@router.post("/{holding_id}/alerts", response_model=HoldingResponse, status_code=201)
async def add_alert(
    holding_id: int,
    request: AlertCreateRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        holding = await PortfolioService(db).add_alert(user_id, holding_id, request)
        return HoldingResponse.model_validate(holding)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to add alert to {holding_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to add alert")


@router.patch("/{holding_id}/alerts/{alert_id}", response_model=HoldingResponse)
async def toggle_alert(
    holding_id: int,
    alert_id: int,
    request: AlertToggleRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        holding = await PortfolioService(db).set_alert_active(
            user_id, holding_id, alert_id, request.active
        )
        return HoldingResponse.model_validate(holding)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to update alert {alert_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update alert")
