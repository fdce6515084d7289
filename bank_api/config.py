"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Bank API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    # The default is a private in-memory SQLite database. Nothing
    # survives a restart.
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://")

    # Authentication
    JWT_SECRET: str = os.getenv("JWT_SECRET", "bank-api-secret-key")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", "1440"))

    # Accounts
    INITIAL_BALANCE: Decimal = Decimal(os.getenv("INITIAL_BALANCE", "1000.00"))
    SEED_DEMO_DATA: bool = os.getenv("SEED_DEMO_DATA", "true").lower() == "true"
    ADMIN_USERNAMES: frozenset[str] = frozenset(
        name.strip()
        for name in os.getenv("ADMIN_USERNAMES", "admin").split(",")
        if name.strip()
    )

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE: str | None = os.getenv("LOG_FILE") or None

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    The process-wide settings.

    Values are read from the environment when this module is
    imported, so tests that need other values set the variables
    before importing bank_api.
    """
    return Settings()
