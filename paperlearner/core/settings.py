"""
Runtime settings, read from the environment (``PAPERLEARNER_*``) or ``.env``
"""
from __future__ import annotations

import enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .http import DEFAULT_USER_AGENT


class LogLevel(str, enum.Enum):
    """Possible log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Settings(BaseSettings):
    """
    Engine settings.

    These parameters can be configured
    with environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="PAPERLEARNER_",
        env_file=".env",
        extra="ignore",
    )

    # User source configurations, loaded after the bundled ones
    config_dir: Path = Path("~/.config/paperlearner/retrievers")
    database_path: Path = Path("~/.local/share/paperlearner/papers.db")
    pdf_dir: Path = Path("~/Documents/paperlearner/papers")

    request_timeout: float = Field(default=30.0, gt=0)
    # Threads available for blocking network calls
    max_workers: int = Field(default=4, ge=1)
    # Abort on a bad user source file instead of skipping it
    strict_config: bool = False
    user_agent: str = DEFAULT_USER_AGENT

    log_level: LogLevel = LogLevel.WARNING


@lru_cache
def get_settings() -> Settings:
    return Settings()
