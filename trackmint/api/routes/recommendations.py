"""
Recommendation API Routes
Stocks, funds and bonds matched to the caller's risk category
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.api.deps import get_current_user_id, get_market_data, get_recommendation_catalog
from trackmint.config import settings
from trackmint.domain.errors import DomainError
from trackmint.domain.models.categories import RISK_APPETITE_TO_CATEGORY, risk_category_from_label
from trackmint.domain.schemas.advisory import (
    BondSchema,
    CandidateSchema,
    FundSchema,
    RecommendationResponse,
)
from trackmint.infrastructure.db.database import get_db
from trackmint.services.budget_service import BudgetService
from trackmint.services.recommendation_service import RecommendationService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=RecommendationResponse)
async def get_recommendations(
    risk: Optional[str] = None,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    market_data=Depends(get_market_data),
    catalog=Depends(get_recommendation_catalog),
):
    """
    Recommendations for a risk category

    `risk` accepts Conservative / Balanced / Aggressive (or the lowercase
    values); without it the profile's risk appetite is used.
    """
    try:
        profile, allocation = await BudgetService(db).allocation(user_id)
        if risk:
            risk_category = risk_category_from_label(risk)
        else:
            risk_category = RISK_APPETITE_TO_CATEGORY[profile.risk_appetite]

        service = RecommendationService(
            catalog,
            market_data,
            quote_timeout_seconds=settings.QUOTE_TIMEOUT_SECONDS,
            symbol_limit=settings.RECOMMENDATION_SYMBOL_LIMIT,
            top_n=settings.RECOMMENDATION_TOP_N,
        )
        result = await service.recommend(risk_category)
        ranked = result.ranked
        return RecommendationResponse(
            risk_category=ranked.risk_category,
            source=result.source,
            stocks=[CandidateSchema.model_validate(c) for c in ranked.picks],
            top_performers=[CandidateSchema.model_validate(c) for c in ranked.top_performers],
            worst_performers=[CandidateSchema.model_validate(c) for c in ranked.worst_performers],
            mutual_funds=[FundSchema.model_validate(f) for f in result.mutual_funds],
            bonds=[BondSchema.model_validate(b) for b in result.bonds],
            monthly_savings=allocation.savings,
        )
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Failed to build recommendations: {e}")
        raise HTTPException(status_code=500, detail="Failed to build recommendations")
