# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for h5p-essay.

This package provides centralized configuration management:
- Settings: Pydantic-based settings loaded from environment variables
- YAML loader: Utilities for loading task files

Example:
    >>> from h5p_essay.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.scoring.override_case_sensitive
    'default'

    >>> from h5p_essay.core.config import load_yaml
    >>> params = load_yaml(Path("config/tasks/photosynthesis.yaml"))
"""

from h5p_essay.core.config.settings import (
    ScoringSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from h5p_essay.core.config.yaml_loader import (
    YAMLLoadError,
    deep_merge,
    load_yaml,
    load_yaml_directory,
)

__all__ = [
    # Settings
    "Settings",
    "ScoringSettings",
    "get_settings",
    "clear_settings_cache",
    # YAML utilities
    "load_yaml",
    "load_yaml_directory",
    "deep_merge",
    "YAMLLoadError",
]
