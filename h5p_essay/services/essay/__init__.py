# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""H5P Essay Scoring Service.

This package scores free-text answers against the keyword groups of an
H5P Essay task. It includes:
- text_utils: Edit distances, word isolation and fuzzy search
- detectors: Exact, wildcard and fuzzy occurrence detection
- matching: Alternative expansion and per-group match collection
- EssayScorer: Score, explanations and overall feedback
- loader: Task loading from H5P params, YAML or content.json

Usage:
    from h5p_essay.services.essay import EssayScorer, load_task_file

    task = load_task_file(Path("config/tasks/photosynthesis.yaml"))
    evaluation = EssayScorer(task).evaluate(answer)
    print(evaluation.score, evaluation.max_score, evaluation.feedback)
"""

from h5p_essay.services.essay.exceptions import (
    AnswerTooShortError,
    EssayConfigurationError,
    EssayError,
    InvalidArgumentError,
    MalformedPatternError,
)
from h5p_essay.services.essay.loader import load_task, load_task_directory, load_task_file
from h5p_essay.services.essay.matching import GroupMatcher, merge_matches
from h5p_essay.services.essay.models import (
    Alternative,
    Behaviour,
    EssayEvaluation,
    EssayTask,
    Explanation,
    FeedbackRange,
    FeedbackWord,
    KeywordGroup,
    KeywordOptions,
    Match,
    Override,
)
from h5p_essay.services.essay.scoring import EssayScorer, evaluate_answer, normalize_answer

__all__ = [
    "EssayScorer",
    "evaluate_answer",
    "normalize_answer",
    "GroupMatcher",
    "merge_matches",
    "load_task",
    "load_task_file",
    "load_task_directory",
    "EssayTask",
    "KeywordGroup",
    "KeywordOptions",
    "Behaviour",
    "FeedbackRange",
    "FeedbackWord",
    "Override",
    "Match",
    "Alternative",
    "Explanation",
    "EssayEvaluation",
    "EssayError",
    "InvalidArgumentError",
    "MalformedPatternError",
    "EssayConfigurationError",
    "AnswerTooShortError",
]
