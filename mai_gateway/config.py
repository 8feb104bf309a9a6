"""
Configuration management using Pydantic Settings.
Loads environment variables from .env file with validation.
"""

from pathlib import Path
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server Configuration
    api_host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, description="Listening port (PORT)")

    # Logging
    log_level: str = Field(default="INFO")

    # Request bodies are unbounded unless a limit is configured
    max_body_bytes: Optional[int] = Field(
        default=None,
        gt=0,
        description="Reject POST bodies larger than this many bytes with 413"
    )

    # Upstream plans API
    plans_api_url: Optional[str] = Field(
        default=None,
        description="Endpoint that returns plan data for a lookup payload"
    )
    plans_api_key: Optional[str] = Field(
        default=None,
        description="Bearer token sent to the plans API"
    )
    plans_api_timeout: float = Field(default=15.0, gt=0)

    # Fireworks AI Configuration
    fireworks_api_key: Optional[str] = Field(
        default=None,
        description="Fireworks AI API key"
    )
    fireworks_llm_model: str = Field(
        default="accounts/fireworks/models/llama-v3p3-70b-instruct",
        description="Fireworks model used for closing scripts"
    )

    # Base URL used by extension-side tooling
    api_base: str = Field(default="http://localhost:3000")

    class Config:
        env_file = Path(__file__).parent.parent / ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
