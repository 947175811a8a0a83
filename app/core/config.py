"""
Application configuration management using Pydantic Settings
Handles all environment variables and application settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List, Dict
from decimal import Decimal
from functools import lru_cache

class Settings(BaseSettings):
    """Main application settings"""

    # Application Settings
    APP_NAME: str = "Spend2Earn API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:5174"]
    CORS_ALLOW_CREDENTIALS: bool = True

    # Sessions
    SESSION_TTL_SECONDS: Optional[int] = None  # None = sessions never expire
    STRICT_AUTH_ERRORS: bool = False  # True = 401 instead of 404 for bad sessions

    # Ledger
    DEFAULT_STARTING_BALANCE: Decimal = Decimal("0")
    CASHBACK_RATE: Decimal = Decimal("0.05")
    SEED_TRANSACTION_HISTORY: bool = True
    SEED_TRANSACTION_COUNT: int = 5

    # Catalog
    FIXED_TOTAL_VIEWS: Dict[str, int] = {"aldi": 10000}

    # Test simulation
    SIMULATION_INTERVAL_SECONDS: float = 4.0
    SIMULATION_MONTHS: int = 12
    SIMULATION_YEAR: int = 2025
    TRANSACTIONS_PER_MONTH: int = 10
    RENT_AMOUNT: int = 450
    RENT_DAY: int = 15
    ROAST_THRESHOLD: int = 1300
    EMERGENCY_ROAST_THRESHOLD: int = 1500

    # AI Services
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"
    AI_TIMEOUT_SECONDS: float = 30.0

    # Realtime
    RECENT_EVENTS_LIMIT: int = 200

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

@lru_cache()
def get_settings() -> Settings:
    """
    Create cached settings instance
    This ensures settings are loaded only once
    """
    return Settings()

# Global settings instance
settings = get_settings()
