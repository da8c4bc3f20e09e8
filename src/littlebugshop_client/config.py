"""
Configuration settings for the LittleBugShop test client.

Settings are read from the environment profile ``envProfiles/<ENV>.env``
(when present) and then from process environment variables, e.g.
BASE_URL, API_TIMEOUT, ENV, LOG_LEVEL.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from littlebugshop_client.urls import DEFAULT_BASE_URL

ENV_PROFILES_DIR = Path("envProfiles")


class ShopSettings(BaseSettings):
    """
    Configuration for tests running against a LittleBugShop backend.

    Variables carry no prefix so the same profile files work for every tool
    in the test setup.
    """

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Backend
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Scheme, host and port of the backend (no /api suffix)",
    )
    env: str = Field(
        default="local",
        description="Name of the target environment (local, staging, ...)",
    )

    # HTTP client settings
    api_timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
    )
    max_retries: int = Field(
        default=3,
        description="Attempts for requests failing at the transport level",
    )

    log_level: str = Field(
        default="INFO",
        description="Log level for the littlebugshop_client loggers",
    )

    # Seeded accounts on the backend
    admin_username: str = Field(default="admin")
    admin_password: str = Field(default="admin123")
    user_username: str = Field(default="User")
    user_password: str = Field(default="qazwsxedcrfv12345")

    # Reporting
    bug_tracker_url: str = Field(
        default="https://your-bug-tracker.com/browse",
        description="Prefix for links to known bugs",
    )
    run_api_tests: bool = Field(
        default=False,
        description="Run tests that need a live backend",
    )

    @field_validator("base_url", mode="before")
    @classmethod
    def _default_empty_base_url(cls, value: Optional[str]) -> str:
        if not value or not str(value).strip():
            return DEFAULT_BASE_URL
        return str(value).strip().rstrip("/")


def env_profile_path(env: Optional[str] = None) -> Path:
    """Path of the profile file for an environment name."""
    return ENV_PROFILES_DIR / f"{env or os.environ.get('ENV') or 'local'}.env"


# Programmatically configured instance, takes precedence over the environment
_settings: Optional[ShopSettings] = None


@lru_cache
def _load_settings() -> ShopSettings:
    return ShopSettings(_env_file=env_profile_path())


def get_settings() -> ShopSettings:
    """
    Get the settings singleton.

    The environment is only read once; see configure_settings() and
    reset_settings() for overriding it.

    Returns:
        ShopSettings instance
    """
    if _settings is not None:
        return _settings
    return _load_settings()


def configure_settings(**overrides) -> ShopSettings:
    """
    Configure settings programmatically.

    Overrides take precedence over environment variables; None values are
    ignored.

    Returns:
        The new ShopSettings instance, also returned by get_settings()
    """
    global _settings

    _settings = ShopSettings(
        _env_file=env_profile_path(overrides.get("env")),
        **{k: v for k, v in overrides.items() if v is not None},
    )
    return _settings


def reset_settings() -> None:
    """Reset settings so the next get_settings() call reloads the environment."""
    global _settings
    _settings = None
    _load_settings.cache_clear()


def configure_logging(level: Optional[str] = None) -> None:
    """Set the package log level (defaults to the configured LOG_LEVEL)."""
    level_name = (level or get_settings().log_level).upper()
    logging.getLogger("littlebugshop_client").setLevel(
        getattr(logging, level_name, logging.INFO)
    )
