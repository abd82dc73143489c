"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Life Mirror server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default; there is no auth layer in front of the tools.
    lifemirror_host: str = "127.0.0.1"
    lifemirror_port: int = 8001
    lifemirror_log_level: str = "info"
    lifemirror_transport: Literal["streamable-http", "stdio"] = "streamable-http"
    # Binding to a non-loopback host is refused unless this is set true.
    lifemirror_allow_insecure_bind: bool = False

    # Engine windows
    # The new moment plus the five before it.
    recent_moment_window: int = Field(default=6, ge=1)
    streak_window_days: int = Field(default=7, ge=1)
    history_page_size: int = Field(default=10, ge=1)

    # Session store
    seed_demo_data: bool = False


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
