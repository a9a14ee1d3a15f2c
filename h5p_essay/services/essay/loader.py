# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Essay task loading.

Tasks are H5P.Essay params, either as exported in an H5P package's
content.json or authored as YAML:

    taskDescription: Explain photosynthesis.
    keywords:
      - keyword: sunlight
        alternatives: [light, solar energy, "/sun(shine)?/"]
        options:
          points: 2
          caseSensitive: false
          forgiveMistakes: true
    behaviour:
      minimumLength: 50
      percentagePassing: 50

Usage:
    from h5p_essay.services.essay.loader import load_task_file

    task = load_task_file(Path("config/tasks/photosynthesis.yaml"))
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from h5p_essay.core.config.settings import get_settings
from h5p_essay.core.config.yaml_loader import YAMLLoadError, load_yaml, load_yaml_directory
from h5p_essay.services.essay.exceptions import EssayConfigurationError
from h5p_essay.services.essay.models import EssayTask

logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)


def _format_validation_errors(error: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
        for item in error.errors()
    ]


def load_task(params: Mapping[str, Any], source: str | None = None) -> EssayTask:
    """Build an Essay task from H5P params.

    Args:
        params: H5P.Essay params (camelCase or snake_case keys).
        source: Description of where the params came from, for errors.

    Returns:
        Validated task.

    Raises:
        EssayConfigurationError: If the params do not validate.
    """
    if not isinstance(params, Mapping):
        raise EssayConfigurationError(
            message="Task params must be a mapping",
            source=source,
        )

    try:
        task = EssayTask.model_validate(dict(params))
    except ValidationError as e:
        raise EssayConfigurationError(
            message="Invalid Essay task params",
            source=source,
            validation_errors=_format_validation_errors(e),
        ) from e

    logger.debug("Loaded Essay task with %d keyword groups", len(task.keywords))
    return task


def load_task_file(path: Path) -> EssayTask:
    """Load an Essay task from a YAML or JSON (content.json) file.

    Args:
        path: Task file.

    Returns:
        Validated task.

    Raises:
        EssayConfigurationError: If the file cannot be read or does not validate.
    """
    if path.suffix in JSON_SUFFIXES:
        try:
            params = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise EssayConfigurationError(
                message=f"Cannot load task file: {e}",
                source=str(path),
            ) from e
    else:
        try:
            params = load_yaml(path)
        except YAMLLoadError as e:
            raise EssayConfigurationError(message=e.reason, source=str(path)) from e

    task = load_task(params, source=str(path))
    logger.info("Loaded Essay task %s", path.name)
    return task


def load_task_directory(path: Path | None = None) -> dict[str, EssayTask]:
    """Load all YAML tasks of a directory, merged with its _defaults file.

    Args:
        path: Directory with task files, defaults to settings.tasks_dir.

    Returns:
        Mapping of file stem to task.

    Raises:
        EssayConfigurationError: If any task cannot be loaded.
    """
    if path is None:
        path = get_settings().tasks_dir

    try:
        raw_tasks = load_yaml_directory(path)
    except YAMLLoadError as e:
        raise EssayConfigurationError(message=e.reason, source=str(e.path)) from e

    tasks = {
        name: load_task(params, source=f"{path}/{name}")
        for name, params in raw_tasks.items()
    }
    logger.info("Loaded %d Essay tasks from %s", len(tasks), path)
    return tasks
