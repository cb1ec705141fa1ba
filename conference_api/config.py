# conference_api/config.py

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables
    or a `.env` file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql+asyncpg://user:password@db:5432/conferences"
    """SQLAlchemy async database URL."""

    SQL_ECHO: bool = False
    """Echo SQL statements emitted by the engine."""

    SECRET_KEY: str
    """Key used to sign access tokens. There is no default on purpose."""

    ALGORITHM: str = "HS256"
    """JWT signing algorithm."""

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30
    """Lifetime of issued access tokens, in minutes."""

    REDIS_URL: Optional[str] = None
    """Redis URL for the geocoding cache. Caching is disabled when unset."""

    GEOCODING_ENABLED: bool = True
    GEOCODING_URL: str = "https://nominatim.openstreetmap.org/reverse"
    GEOCODING_TIMEOUT: float = 5.0
    GEOCODING_USER_AGENT: str = "conference-api"
    GEOCODING_CACHE_TTL: int = 60 * 60 * 24

    LOG_LEVEL: str = "INFO"

    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000


@lru_cache
def get_settings() -> Settings:
    return Settings()
