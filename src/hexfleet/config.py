"""Lightweight configuration for hexfleet hosts."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Battle defaults, overridable through ``HEXFLEET_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HEXFLEET_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    grid_width: int = Field(default=12, ge=5, description="Battlefield columns")
    grid_height: int = Field(default=8, ge=7, description="Battlefield rows")
    session_id: int | None = Field(
        default=None,
        ge=0,
        description="Battle number the default seeds derive from; random when unset",
    )
    terrain_seed: str | None = Field(
        default=None, description="Seed for terrain generation; derived from session_id when unset"
    )
    combat_seed: str | None = Field(
        default=None,
        description="Seed for combat, effect and wind rolls; derived from session_id when unset",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
