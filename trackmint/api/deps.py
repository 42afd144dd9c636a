"""
Shared route dependencies: caller identity and external collaborators.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Header, HTTPException

from trackmint.config import settings
from trackmint.infrastructure.ai.gemini_client import GeminiAdvisor
from trackmint.infrastructure.catalog.loader import RecommendationCatalog, get_catalog
from trackmint.infrastructure.market_data.provider_factory import get_market_data_provider
from trackmint.infrastructure.market_data.types import MarketDataProvider

logger = logging.getLogger(__name__)


async def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> int:
    """Resolve the caller from the X-User-Id header (positive integer)"""
    try:
        user_id = int(x_user_id) if x_user_id is not None else 0
    except ValueError:
        user_id = 0
    if user_id <= 0:
        raise HTTPException(status_code=401, detail="Missing or invalid X-User-Id header")
    return user_id


@lru_cache(maxsize=1)
def _market_data_provider() -> Optional[MarketDataProvider]:
    try:
        return get_market_data_provider()
    except RuntimeError as e:
        logger.warning(f"⚠️ {e}")
        return None


def get_market_data() -> Optional[MarketDataProvider]:
    return _market_data_provider()


@lru_cache(maxsize=1)
def _advisor() -> GeminiAdvisor:
    return GeminiAdvisor(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
        timeout_seconds=settings.GEMINI_TIMEOUT_SECONDS,
    )


def get_advisor() -> GeminiAdvisor:
    return _advisor()


def get_recommendation_catalog() -> RecommendationCatalog:
    return get_catalog()
