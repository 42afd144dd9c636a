"""
Advice API Routes
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.api.deps import get_advisor, get_current_user_id
from trackmint.domain.errors import DomainError
from trackmint.domain.schemas.advisory import AdviceRequest, AdviceResponse
from trackmint.infrastructure.db.database import get_db
from trackmint.services.advice_service import AdviceService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=AdviceResponse)
async def ask_advice(
    request: AdviceRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    advisor=Depends(get_advisor),
):
    try:
        advice = await AdviceService(db, advisor).ask(user_id, request.question)
        return AdviceResponse(answer=advice.answer, source=advice.source)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to answer question: {e}")
        raise HTTPException(status_code=500, detail="Failed to get advice")
