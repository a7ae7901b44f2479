"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

_ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
    "mysql://": "mysql+aiomysql://",
}


def to_async_driver_url(url: str) -> str:
    """Hosting providers hand out sync URLs; the engine needs an async driver."""
    for prefix, replacement in _ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return url.replace(prefix, replacement, 1)
    return url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://ministry:ministry@db:5432/ministry"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_to_async_driver(cls, v: str) -> str:
        if isinstance(v, str):
            return to_async_driver_url(v)
        return v

    database_pool_size: int = 10
    database_max_overflow: int = 5
    # Seconds a request waits for a pooled connection before PoolExhaustedError
    database_pool_timeout: float = 10.0
    database_pool_recycle: int = 3600

    # API
    cors_origins: list[str] = ["*"]
    gzip_minimum_size: int = 1000
    # Only behind TLS; browsers pin HTTPS for hsts_max_age seconds
    hsts_enabled: bool = False
    hsts_max_age: int = 15552000
    host: str = "0.0.0.0"
    port: int = 8080

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
