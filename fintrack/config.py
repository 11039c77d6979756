"""
fintrack/config.py

Runtime configuration for the FinTrack API.

Values come from environment variables, optionally seeded from a .env file
at the project root. Nothing here is read at import time: call get_settings()
when the process starts (main.create_app does this) so tests can build their
own Settings instead.
"""

import os
import logging
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(BASE_DIR)

DEFAULT_DATABASE_URL = "sqlite:///./fintrack.db"
DEFAULT_JWT_SECRET = "change-me-jwt-secret"

# Token lifetimes (seconds)
LOGIN_TOKEN_EXPIRE_SECONDS = 86400        # 24 hours
REGISTER_TOKEN_EXPIRE_SECONDS = 360000    # 100 hours


class Settings(BaseModel):
    """
    Process-wide settings. The two values the service cannot run without are
    the store URL and the token-signing secret; the rest have usable defaults.
    """
    database_url: str = DEFAULT_DATABASE_URL
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    cors_allow_origins: List[str] = ["*"]
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080


def get_settings() -> Settings:
    """
    Build Settings from the environment (after loading .env from the project root).
    """
    dotenv_path = os.path.join(PROJECT_ROOT, ".env")
    load_dotenv(dotenv_path=dotenv_path)

    raw_origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
    settings = Settings(
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        jwt_secret=os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        cors_allow_origins=[origin.strip() for origin in raw_origins.split(",") if origin.strip()],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
    )

    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        logging.getLogger(__name__).warning(
            "JWT_SECRET is not set; using the built-in development secret."
        )
    return settings
