"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a JACKUT_-prefixed environment variable
    - get_settings() is cached (lru_cache) — single instance per process
    - Relative SQLite paths are resolved against the working directory

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box with a local data/ directory
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="JACKUT_", case_sensitive=False,
    )

    # Persistence
    database_url: str = "sqlite:///data/jackut.db"
    users_snapshot_key: str = "users"
    communities_snapshot_key: str = "communities"

    @field_validator("database_url", mode="before")
    @classmethod
    def strip_async_driver(cls, v: str) -> str:
        """The gateway runs a sync engine: sqlite+aiosqlite:// becomes sqlite://."""
        if isinstance(v, str) and v.startswith("sqlite+aiosqlite://"):
            return v.replace("sqlite+aiosqlite://", "sqlite://", 1)
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
