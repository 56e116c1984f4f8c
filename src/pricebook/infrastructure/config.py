"""Runtime configuration.

Read from environment variables prefixed ``PRICEBOOK_`` (or a ``.env``
file in the working directory).  Only the composition root reads
settings; every other layer receives plain values.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PRICEBOOK_",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: str = Field(default="sqlite:///data/pricebook.db")
    catalog_path: Path = Field(default=Path("data/products.json"))

    # Upper bound for any single catalog or store read, in seconds
    call_timeout: float = Field(default=5.0, gt=0)
    # How long the database driver waits on a lock before giving up;
    # this is the only bound on writes
    storage_busy_timeout: float = Field(default=5.0, gt=0)

    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
