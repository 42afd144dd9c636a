"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Database
    # ======================
    DATABASE_URL: str = "sqlite+aiosqlite:///./trackmint.db"
    AUTO_CREATE_TABLES: bool = False

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # ======================
    # Timezone
    # ======================
    TIMEZONE: str = "Asia/Kolkata"

    # ======================
    # Market Data
    # ======================
    FINNHUB_API_KEY: Optional[str] = None
    FINNHUB_BASE_URL: str = "https://finnhub.io/api/v1"
    MARKET_DATA_CACHE_TTL: int = 60
    MARKET_DATA_TIMEOUT_SECONDS: float = 10.0
    YFINANCE_ENABLED: bool = True

    # ======================
    # Recommendations
    # ======================
    QUOTE_TIMEOUT_SECONDS: float = 5.0
    RECOMMENDATION_SYMBOL_LIMIT: int = 20
    RECOMMENDATION_TOP_N: int = 5

    # ======================
    # AI Advice
    # ======================
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash-latest"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT_SECONDS: float = 20.0

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )


settings = Settings()
