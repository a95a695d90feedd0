"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts on a developer machine without any setup.  In a
production deployment you should at least override ``JWT_SECRET``.
"""

import os
from dataclasses import dataclass
from decimal import Decimal

from fastapi import Request


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "UPoint Purchase API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Key used to sign bearer tokens.  Tokens are valid for one hour.
    secret_key: str = os.getenv("JWT_SECRET", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    # Path to the SQLite database file.  A relative path is resolved
    # relative to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "upoint_purchase.db")

    # Balance credited to the card of every new account, and the share
    # of the item price returned to the card after a purchase.
    starting_balance: Decimal = Decimal(os.getenv("STARTING_BALANCE", "100"))
    cashback_rate: Decimal = Decimal(os.getenv("CASHBACK_RATE", "0.03"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was built with."""
    return request.app.state.settings
