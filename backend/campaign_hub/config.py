"""Settings - every tunable of the Campaign Hub API, read from the environment.

Invariants:
    - One Settings instance per process (get_settings is lru_cached)
    - database_url always names an async driver (asyncpg or aiosqlite)
    - log_level is upper-cased; unknown log_format values fall back to text

Design Decisions:
    - pydantic-settings with .env support: docker-compose and tests set plain env vars
    - Pagination limits live here so every list route caps page size the same way
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ASYNC_POSTGRES_SCHEME = "postgresql+asyncpg://"


def to_async_url(url: str) -> str:
    """Managed Postgres hands out postgres:// or postgresql://; asyncpg needs its own scheme."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return ASYNC_POSTGRES_SCHEME + url[len(prefix):]
    return url


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    service_name: str = "campaign-hub-api"
    service_version: str = "1.0.0"

    # Database
    database_url: str = "postgresql+asyncpg://campaigns:campaigns@db:5432/campaigns"
    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_echo: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:5173"]
    default_page_size: int = 20
    list_page_max: int = 100

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        return to_async_url(v) if isinstance(v, str) else v

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("log_format", mode="before")
    @classmethod
    def known_log_format(cls, v: str) -> str:
        return v if v in ("json", "text") else "text"

    def page_limit(self, requested: int | None) -> int:
        """Requested page size, defaulted and capped at list_page_max."""
        return min(requested or self.default_page_size, self.list_page_max)


@lru_cache
def get_settings() -> Settings:
    return Settings()
