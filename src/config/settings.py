# src/config/settings.py - v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for deployment-specific settings. Built once at
startup and passed into component constructors; no component reads the
environment directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from threadbook.core.errors import ThreadbookError


class ConfigurationError(ThreadbookError):
    """Raised when configuration is missing or internally inconsistent."""


@dataclass(frozen=True)
class RenderingCredentials:
    """Credentials for the image rendering service."""

    api_key: str
    account_id: str


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Summarization (OpenAI-compatible chat completions) ===
    openai_api_key: str = ""
    openai_base_url: str = ""
    openai_model: str = ""
    llm_temperature: float = 0.2
    llm_max_tokens: int = 4096

    # === Image rendering (optional; both required to embed images) ===
    cloudflare_api_key: str = ""
    cloudflare_account_id: str = ""
    render_timeout_s: float = 60.0
    render_viewport_width: int = 640

    # === Content source ===
    lesswrong_graphql_url: str = "https://www.lesswrong.com/graphql"
    http_timeout_s: float = 30.0
    max_comments_fetched: int = 9999
    max_comments_summarized: int = 100

    # === Cache ===
    cache_root: Path = Path(".cache")

    # === EPUB ===
    cover_image_path: Path | None = None

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("max_comments_summarized", "max_comments_fetched")
    @classmethod
    def validate_comment_limits(cls, v: int) -> int:
        if v < 0:
            raise ValueError("comment limits must be >= 0")
        return v

    @field_validator("render_timeout_s", "http_timeout_s")
    @classmethod
    def validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be > 0")
        return v

    @model_validator(mode="after")
    def validate_rendering_pair(self) -> Settings:
        """Cloudflare key and account id must be set together."""
        if bool(self.cloudflare_api_key) != bool(self.cloudflare_account_id):
            raise ConfigurationError(
                "CLOUDFLARE_API_KEY and CLOUDFLARE_ACCOUNT_ID must be set together"
            )
        return self

    # --- Helpers ---

    @property
    def rendering_credentials(self) -> RenderingCredentials | None:
        """Rendering credentials, or None when image embedding is disabled."""
        if not self.cloudflare_api_key:
            return None
        return RenderingCredentials(
            api_key=self.cloudflare_api_key,
            account_id=self.cloudflare_account_id,
        )

    def require_model(self) -> str:
        """Return the chat model name.

        Raises:
            ConfigurationError: If OPENAI_MODEL is not set.
        """
        if not self.openai_model:
            raise ConfigurationError("OPENAI_MODEL must be set")
        return self.openai_model


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
