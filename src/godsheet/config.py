"""Configuration management for godsheet using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="GODSHEET_",
        extra="ignore",
    )

    # Rules data
    rules_path: Path | None = Field(
        default=None, description="YAML rules file overriding the packaged tables"
    )
    strings_path: Path | None = Field(
        default=None, description="YAML string table overriding the packaged labels"
    )

    # Rolls
    default_roll_mode: str = Field(
        default="roll", description="Roll mode preselected in check dialogs"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format (console or json)")

    @property
    def data_dir(self) -> Path:
        """Get the packaged data directory path."""
        return Path(__file__).parent / "data"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
