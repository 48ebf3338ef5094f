"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `DOCSUMMARIZER_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Language = Literal["id", "en"]


class Settings(BaseSettings):
    """DocSummarizer settings.

    All fields are environment-configurable. Prefix is `DOCSUMMARIZER_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCSUMMARIZER_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="INFO")

    # Text completion (any OpenAI-compatible endpoint)
    api_key: str | None = Field(default=None)
    completion_base_url: str | None = Field(default=None)
    default_model: str = Field(default="gpt-4o-mini")
    completion_timeout_s: float = Field(default=120.0, ge=1.0, le=600.0)
    max_output_tokens: int = Field(default=4000, ge=64, le=32000)
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    default_language: Language = Field(default="id")

    # Networking
    http_timeout_s: float = Field(default=30.0, ge=1.0, le=300.0)
    http_user_agent: str = Field(default="Mozilla/5.0 (compatible; DocSummarizer/1.0)")
    http_accept: str = Field(default="text/html,application/xhtml+xml")

    # Extraction / segmentation
    max_content_length: int = Field(default=100_000, ge=1000)
    chunk_size: int = Field(default=8000, ge=100)
    max_chunks: int = Field(default=10, ge=1, le=100)


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("DOCSUMMARIZER_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
