# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""YAML loader utilities for task configuration files.

Essay tasks can be authored as YAML files. A task directory may contain a
"_defaults.yaml" file whose contents are deep-merged under every task, e.g.
to share behaviour settings across a course.

Example:
    >>> from pathlib import Path
    >>> from h5p_essay.core.config.yaml_loader import load_yaml, load_yaml_directory
    >>> task = load_yaml(Path("config/tasks/photosynthesis.yaml"))
    >>> tasks = load_yaml_directory(Path("config/tasks"))
"""

from pathlib import Path
from typing import Any

import yaml

DEFAULTS_STEM = "_defaults"
YAML_SUFFIXES = (".yaml", ".yml")


class YAMLLoadError(Exception):
    """Raised when a YAML file cannot be loaded or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize YAMLLoadError.

        Args:
            path: Path of the file or directory that failed to load.
            reason: Why loading failed.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load YAML from '{path}': {reason}")


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file whose root is a mapping.

    Args:
        path: YAML file to load.

    Returns:
        Parsed mapping, empty for an empty file.

    Raises:
        YAMLLoadError: If the file is missing, unreadable, not valid YAML
            or its root is not a mapping.
    """
    if not path.is_file():
        reason = "Path is not a file" if path.exists() else "File does not exist"
        raise YAMLLoadError(path, reason)

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise YAMLLoadError(path, f"Cannot read file: {e}") from e
    except yaml.YAMLError as e:
        raise YAMLLoadError(path, f"Invalid YAML syntax: {e}") from e

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise YAMLLoadError(path, f"YAML root must be a mapping, got {type(parsed).__name__}")
    return parsed


def load_yaml_directory(path: Path) -> dict[str, dict[str, Any]]:
    """Load every task file of a directory.

    Files are keyed by stem. If the directory holds a "_defaults" file, it
    is merged under each task and not returned itself.

    Args:
        path: Directory with .yaml / .yml files.

    Returns:
        Mapping of file stem to parsed (and defaults-merged) contents.

    Raises:
        YAMLLoadError: If path is not a directory or any file fails to load.
    """
    if not path.is_dir():
        reason = "Path is not a directory" if path.exists() else "Directory does not exist"
        raise YAMLLoadError(path, reason)

    files = sorted(p for p in path.iterdir() if p.is_file() and p.suffix in YAML_SUFFIXES)

    defaults: dict[str, Any] = {}
    for file in files:
        if file.stem == DEFAULTS_STEM:
            defaults = load_yaml(file)

    return {
        file.stem: deep_merge(defaults, load_yaml(file))
        for file in files
        if file.stem != DEFAULTS_STEM
    }


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge two mappings recursively, override taking precedence.

    Args:
        base: Mapping with default values.
        override: Mapping whose values win.

    Returns:
        New merged mapping; the inputs are left untouched.

    Example:
        >>> deep_merge({"behaviour": {"minimumLength": 10, "enableRetry": True}},
        ...            {"behaviour": {"minimumLength": 50}})
        {'behaviour': {'minimumLength': 50, 'enableRetry': True}}
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged
