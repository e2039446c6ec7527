"""Typed settings loader for the weather-change command line."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = Field(default="dev", alias="APP_ENV")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
    )
    journal_enabled: bool = Field(default=True, alias="JOURNAL_ENABLED")
    journal_dir: Path = Field(default=Path("./data/journal"), alias="JOURNAL_DIR")
    cli_max_print: int = Field(default=20, alias="CLI_MAX_PRINT")

    @model_validator(mode="after")
    def validate_limits(self) -> Settings:
        """Validate numeric limits."""
        if self.cli_max_print <= 0:
            raise ValueError("CLI_MAX_PRINT must be > 0.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for journaling."""
        return {
            "app_env": self.app_env,
            "log_level": self.log_level,
            "journal_enabled": self.journal_enabled,
            "journal_dir": str(self.journal_dir),
            "cli_max_print": self.cli_max_print,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc

    if settings.journal_enabled:
        try:
            settings.journal_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(f"Cannot create JOURNAL_DIR {settings.journal_dir}: {exc}") from exc
    return settings
