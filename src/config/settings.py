# src/config/settings.py — v2
"""Typed configuration loaded from the environment via pydantic-settings.

Every variable is prefixed with ``MELLIVORA_LOGGER_`` and may also come from a
``.env`` file in the working directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when the logging subsystem is configured in an unusable way."""


class Settings(BaseSettings):
    """Process-level settings for the logger factory and CLI."""

    model_config = SettingsConfigDict(
        env_prefix="MELLIVORA_LOGGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Root directory for relative log filenames (None = auto-discover)
    root_path: Path | None = None

    # JSON file describing formatters/processors/handlers/loggers
    config_file: Path | None = None

    # Channel used when none is requested
    default_channel: str = ""

    # Verbosity of the library's own diagnostics (CLI console output)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("config_file")
    @classmethod
    def validate_config_file(cls, v: Path | None) -> Path | None:
        if v is not None and v.suffix.lower() != ".json":
            raise ValueError("config_file must be a .json file")
        return v


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
