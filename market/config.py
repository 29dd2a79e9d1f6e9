"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a MARKET_* environment variable or .env entry
    - get_settings() is cached (lru_cache): single instance per process
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MARKET_", env_file=".env", case_sensitive=False,
    )

    # Snapshot store
    snapshot_url: str = "sqlite:///campus-market.db"

    @field_validator("snapshot_url", mode="before")
    @classmethod
    def path_to_sqlite_url(cls, v: str) -> str:
        """A bare file path means a SQLite file."""
        if isinstance(v, str) and "://" not in v:
            return f"sqlite:///{v}"
        return v

    # Seed data
    seed_default_data: bool = True
    default_password: str = "123456"

    # Observability
    log_level: str = "WARNING"
    log_format: Literal["text", "json"] = "text"


@lru_cache
def get_settings() -> Settings:
    return Settings()
