"""Application configuration.

- Central place for environment variables (pydantic-settings), kept out of
  the CLI layer.
- Adapters (HTTP client, logging) read their settings from here.

With no environment set, the defaults reproduce the documented behavior.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "reqpeek"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "reqpeek"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "reqpeek"
    return Path.home() / ".config" / "reqpeek"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings."""

    model_config = SettingsConfigDict(
        env_prefix="REQPEEK_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first, then the user's global one.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="reqpeek/0.1",
        min_length=1,
        description="User-Agent header sent with every request.",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Follow 3xx responses, as the transport does by default.",
    )
    max_redirects: int = Field(
        default=10,
        ge=0,
        le=100,
        description="Redirect limit when `follow_redirects` is on.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level for diagnostics on stderr (DEBUG, INFO, WARNING, ...).",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}:
            raise ValueError(f"unknown log level: {value!r}")
        return level
