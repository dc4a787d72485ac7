"""
API configuration settings.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """API settings."""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Game
    STARTING_FLUX: int = 1000
    RNG_SEED: Optional[int] = None  # Seeds every session generator when set

    # Session
    SESSION_COOKIE: str = "voidspinner_session"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = "logs"

    class Config:
        env_file = ".env"


settings = Settings()
