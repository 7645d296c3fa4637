"""Library configuration via pydantic-settings.

Reads from .env file or environment variables. Values here are only defaults:
every adapter option (for example ``post_url``) can still be overridden per
call through ``transact(..., options={...})``.

Usage:
    from transactor.config import get_settings
    settings = get_settings()
    print(settings.nmi_post_url)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the transactor package."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_env: Literal["development", "staging", "production"] = "development"
    app_log_level: str = "INFO"

    # --- Network Merchants gateway ---
    nmi_post_url: str = "https://secure.networkmerchants.com/api/transact.php"

    # --- HTTP transport ---
    # Applies only to clients the adapters create themselves.
    http_timeout_seconds: float = 30.0

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the settings."""
    return Settings()
