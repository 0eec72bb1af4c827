"""Application settings and configuration."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from captable.domain.models.enums import TransactionKind


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".captable"


class Settings(BaseSettings):
    """
    Application configuration.

    Every field can be set from the environment with a ``CAPTABLE_`` prefix
    (``CAPTABLE_DATABASE_URL``, ``CAPTABLE_ENFORCE_AUTHORIZED_SHARES`` ...)
    or from a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CAPTABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Cap Table Ledger"
    app_version: str = "0.1.0"

    # SQLite file lives here unless database_url is given
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    log_level: str = "INFO"

    enforce_authorized_shares: bool = Field(
        default=False,
        description="Reject credits that push a security past its authorized share count",
    )

    split_trigger_kind: TransactionKind = Field(
        default=TransactionKind.WITHDRAWAL,
        description="Kind under which split ratios are stored and looked up",
    )
    split_base_terms: list[str] = Field(default_factory=lambda: ["unit"])
    split_class_a_terms: list[str] = Field(
        default_factory=lambda: ["class a", "common stock", "ordinary shares"]
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("split_base_terms", "split_class_a_terms")
    @classmethod
    def normalize_terms(cls, v: list[str]) -> list[str]:
        """Security names are matched case-insensitively, in list order."""
        terms = [t.strip().lower() for t in v if t and t.strip()]
        if not terms:
            raise ValueError("At least one search term is required")
        return terms

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.get_data_dir() / 'captable.db'}"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Replace the settings instance (tests point it at in-memory SQLite)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    global _settings
    _settings = None
