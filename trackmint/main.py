"""
FastAPI Main Application
TrackMint personal finance API
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trackmint.api.routes import advice, budget, expenses, goals, health, portfolio, recommendations, users
from trackmint.config import settings
from trackmint.core.logging import setup_logging
from trackmint.infrastructure.db.database import close_db, init_db
from trackmint.utils.logging_redaction import install_redaction_filter

setup_logging(settings.LOG_LEVEL)
install_redaction_filter()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Opens and closes the database
    """
    logger.info("=" * 60)
    logger.info("🚀 Starting TrackMint API")
    logger.info("=" * 60)

    await init_db()
    logger.info("✅ Database initialized")
    logger.info(f"   ✅ API Server: http://{settings.API_HOST}:{settings.API_PORT}")
    logger.info(f"   ✅ API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")
    logger.info(f"   📈 Finnhub: {'Enabled' if settings.FINNHUB_API_KEY else 'Disabled'}")
    logger.info(f"   🤖 Gemini: {'Enabled' if settings.GEMINI_API_KEY else 'Fallback only'}")

    yield

    logger.info("🛑 Shutting down TrackMint API...")
    await close_db()
    logger.info("✅ Database connections closed")


app = FastAPI(
    title="TrackMint API",
    description="Budgeting, expenses, portfolio tracking, savings goals and recommendations",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["Health"])
app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])
app.include_router(expenses.router, prefix="/api/v1/expenses", tags=["Expenses"])
app.include_router(portfolio.router, prefix="/api/v1/portfolio", tags=["Portfolio"])
app.include_router(goals.router, prefix="/api/v1/goals", tags=["Goals"])
app.include_router(budget.router, prefix="/api/v1/budget", tags=["Budget"])
app.include_router(recommendations.router, prefix="/api/v1/recommendations", tags=["Recommendations"])
app.include_router(advice.router, prefix="/api/v1/advice", tags=["Advice"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "TrackMint API",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "trackmint.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
