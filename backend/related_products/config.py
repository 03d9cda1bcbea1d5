"""Application configuration via environment variables."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    DEBUG: bool = False
    LOG_LEVEL: Literal["debug", "info", "warning", "error", "critical"] = "info"

    # Rule sets
    DEFAULT_RULE_SET: str = "wallet"
    RULE_SETS_DIR: Optional[str] = None  # Extra directory of *.json rule sets

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _lowercase_level(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    return Settings()
