"""
Configuration settings for quizgate.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QUIZGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Generation Service
    # ========================================
    api_url: str = Field(
        default="http://localhost:8000/api",
        description="Base URL of the quiz generation service",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Transport timeout for every request to the generation service",
    )

    # ========================================
    # Operation Limits
    # ========================================
    max_generated_questions: int = Field(
        default=20,
        ge=1,
        description="Upper bound for a single 'generate more questions' request",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
