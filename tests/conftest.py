# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Scenario tests scoring complete answers
"""

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from h5p_essay.core.config.settings import ScoringSettings, clear_settings_cache
from h5p_essay.services.essay.models import EssayTask

PROJECT_ROOT = Path(__file__).resolve().parent.parent


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Make every test see settings loaded from its own environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def scoring_settings() -> ScoringSettings:
    """Provide scoring settings without site-level overrides."""
    return ScoringSettings(
        override_case_sensitive="default",
        override_forgive_mistakes="default",
        linebreak_replacement=" ",
    )


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "scenario: mark test as a scoring scenario over complete answers"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def tasks_dir() -> Path:
    """Provide the directory with the example task files."""
    return PROJECT_ROOT / "config" / "tasks"


@pytest.fixture
def sample_task_params() -> dict[str, Any]:
    """Provide H5P.Essay params as found in content.json."""
    return {
        "taskDescription": "<p>Describe H5P.</p>",
        "keywords": [
            {
                "keyword": "H5P",
                "alternatives": ["HTML5 Package"],
                "options": {
                    "points": 2,
                    "occurrences": 1,
                    "caseSensitive": True,
                    "forgiveMistakes": False,
                    "feedbackIncluded": "H5P is the content type framework.",
                    "feedbackMissed": "Mention the framework.",
                    "feedbackIncludedWord": "answer",
                    "feedbackMissedWord": "keyword",
                },
            },
            {
                "keyword": "interactive",
                "options": {
                    "points": 1,
                    "occurrences": 2,
                    "caseSensitive": False,
                    "forgiveMistakes": True,
                },
            },
        ],
        "behaviour": {
            "minimumLength": 10,
            "percentagePassing": 40,
            "overrideCaseSensitive": "default",
            "overrideForgiveMistakes": "default",
        },
        "overallFeedback": [
            {"from": 0, "to": 49, "feedback": "@score of @total, try again."},
            {"from": 50, "to": 100, "feedback": "Well done: @score of @total."},
        ],
        "solution": {"sample": "H5P makes interactive content."},
    }


@pytest.fixture
def sample_task(sample_task_params: dict[str, Any]) -> EssayTask:
    """Provide a validated task for the sample params."""
    return EssayTask.model_validate(sample_task_params)
