"""
Configuration and settings for the notes service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Hosted PostgREST table (Supabase)
    supabase_url: Optional[str] = Field(default=None)
    supabase_anon_key: Optional[str] = Field(default=None)
    supabase_table: str = Field(default="notes")
    hosted_timeout_seconds: float = Field(default=10.0, gt=0)

    # SQL database (Postgres expected, any SQLAlchemy URL works)
    database_url: Optional[str] = Field(default=None)

    # Key-value store (Redis)
    redis_url: Optional[str] = Field(default=None)
    redis_notes_key: str = Field(default="scrapbook:notes")

    # Local JSON file
    data_dir: str = Field(default="data")
    notes_filename: str = Field(default="notes.json")

    # Development toggles
    memory_fallback: bool = Field(default=True)
    use_in_memory_backends: bool = Field(default=False)

    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
