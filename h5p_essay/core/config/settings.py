# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for h5p-essay.
Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings().

Example:
    >>> from h5p_essay.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

OverrideValue = Literal["on", "off", "default"]


class ScoringSettings(BaseSettings):
    """Site-level scoring configuration.

    The overrides apply to every task whose own override is "default",
    like an H5P site administrator enforcing case sensitivity.

    Attributes:
        override_case_sensitive: Site-level case sensitivity override.
        override_forgive_mistakes: Site-level fuzzy matching override.
        linebreak_replacement: Line break replacement used when a task
            does not configure one.
    """

    model_config = SettingsConfigDict(
        env_prefix="ESSAY_SCORING_",
        extra="ignore",
    )

    override_case_sensitive: OverrideValue = "default"
    override_forgive_mistakes: OverrideValue = "default"
    linebreak_replacement: str = " "


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        tasks_dir: Directory containing Essay task files.
        scoring: Scoring settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="ESSAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    tasks_dir: Path = Path("config/tasks")

    scoring: ScoringSettings = Field(default_factory=ScoringSettings)

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing.
    """
    get_settings.cache_clear()
