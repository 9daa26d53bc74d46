# lotkeeper/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./lotkeeper.db"
    SQL_ECHO: bool = False                      # Log every SQL statement (debug only)

    # ── Rates ─────────────────────────────────────────────────────────────
    FIRST_HOUR_RATE: float = 30.0               # Charged for any stay up to one hour
    EXTRA_HOUR_RATE: float = 20.0               # Per started hour after the first
    CURRENCY_SYMBOL: str = "₺"

    # ── Storage keys ──────────────────────────────────────────────────────
    ACTIVE_VEHICLES_KEY: str = "vehicles"
    COMPLETED_VISITS_KEY: str = "pastVehicles"

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"


settings = Settings()
