from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the router shell and its diagnostic log.

    Values are loaded from environment variables and `.env`.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Logging (diagnostic; size-rotated)
    NAVROUTER_LOG_DIR: Path = Field(default=Path("_logs"))
    NAVROUTER_LOG_LEVEL: str = Field(default="INFO")
    NAVROUTER_LOG_MAX_BYTES: int = Field(default=10 * 1024 * 1024, ge=0)
    # Number of archived log files kept next to the live one.
    NAVROUTER_LOG_BACKUP_COUNT: int = Field(default=10, ge=0)
    # Mirror log records to stderr (off by default so the TUI stays clean).
    NAVROUTER_LOG_CONSOLE: bool = Field(default=False)

    # Shell
    NAVROUTER_ROOT_LABEL: str = Field(default="Home")
    # Upper bound on back-to-back passes when callbacks keep queueing intents.
    NAVROUTER_MAX_PASSES: int = Field(default=16, ge=1)


def load_settings() -> Settings:
    return Settings()
