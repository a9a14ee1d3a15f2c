# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Data models for Essay tasks and scoring results.

Configuration models mirror the H5P.Essay params format (content.json).
They accept the camelCase keys H5P uses as well as snake_case field names:

    >>> group = KeywordGroup.model_validate({
    ...     "keyword": "H5P",
    ...     "alternatives": ["H five P"],
    ...     "options": {"points": 2, "occurrences": 1, "caseSensitive": False},
    ... })
    >>> group.options.case_sensitive
    False

Match and Alternative are lightweight frozen dataclasses created during a
single scoring pass.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_NOT_ENOUGH_CHARS = "You must enter at least @chars characters!"


class FeedbackWord(str, Enum):
    """Word to show in front of a keyword explanation."""

    KEYWORD = "keyword"
    ALTERNATIVE = "alternative"
    ANSWER = "answer"
    NONE = "none"


class Override(str, Enum):
    """Override for a per-keyword option."""

    ON = "on"
    OFF = "off"
    DEFAULT = "default"


class H5PParamsModel(BaseModel):
    """Base model for H5P params: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class KeywordOptions(H5PParamsModel):
    """Scoring and feedback options of a keyword group.

    Attributes:
        points: Points per counted occurrence.
        occurrences: Maximum number of occurrences that are counted.
        case_sensitive: Match case-sensitively.
        forgive_mistakes: Also accept approximate matches.
        feedback_included: Explanation if the keyword was found.
        feedback_missed: Explanation if the keyword was not found.
        feedback_included_word: Word shown with feedback_included.
        feedback_missed_word: Word shown with feedback_missed.
    """

    points: float = Field(default=1, ge=0)
    occurrences: int = Field(default=1, ge=1)
    case_sensitive: bool = True
    forgive_mistakes: bool = False
    feedback_included: str | None = None
    feedback_missed: str | None = None
    feedback_included_word: FeedbackWord | None = None
    feedback_missed_word: FeedbackWord | None = None


class KeywordGroup(H5PParamsModel):
    """One scored unit: a keyword with its alternatives and options.

    Groups without a keyword are not scored.
    """

    keyword: str | None = None
    alternatives: list[str] = Field(default_factory=list)
    options: KeywordOptions = Field(default_factory=KeywordOptions)

    @property
    def max_points(self) -> float:
        """Maximum number of points this group can contribute."""
        if not self.keyword:
            return 0
        return self.options.points * self.options.occurrences


class Behaviour(H5PParamsModel):
    """Task-level behaviour settings relevant for scoring.

    Attributes:
        minimum_length: Minimum number of characters of an answer.
        maximum_length: Maximum number of characters of an answer.
        ignore_scoring: Always award full points.
        points_host: Points reported when scoring is ignored.
        percentage_mastering: Percentage of the maximum score needed for mastery.
        percentage_passing: Percentage of the maximum score needed to pass.
        linebreak_replacement: Replacement for line breaks before matching;
            falls back to the site setting.
        override_case_sensitive: Override for every group's case_sensitive.
        override_forgive_mistakes: Override for every group's forgive_mistakes.
    """

    minimum_length: int = Field(default=0, ge=0)
    maximum_length: int | None = Field(default=None, ge=0)
    ignore_scoring: bool = False
    points_host: int = Field(default=1, ge=0)
    percentage_mastering: float | None = Field(default=None, ge=0, le=100)
    percentage_passing: float | None = Field(default=None, ge=0, le=100)
    linebreak_replacement: str | None = None
    override_case_sensitive: Override = Override.DEFAULT
    override_forgive_mistakes: Override = Override.DEFAULT

    @property
    def effective_minimum_length(self) -> int:
        """Minimum length, never above the maximum length."""
        if self.maximum_length is None:
            return self.minimum_length
        return min(self.minimum_length, self.maximum_length)


class FeedbackRange(H5PParamsModel):
    """Overall feedback for a score range in percent."""

    from_: int = Field(default=0, alias="from")
    to: int = 100
    feedback: str | None = None


class EssayTask(H5PParamsModel):
    """Essay task params needed for scoring.

    Attributes:
        task_description: Task text shown to the learner.
        keywords: Keyword groups to score.
        behaviour: Scoring behaviour.
        overall_feedback: Feedback ranges for the total score.
        not_enough_chars: Message for answers below the minimum length.
    """

    task_description: str = ""
    keywords: list[KeywordGroup] = Field(default_factory=list)
    behaviour: Behaviour = Field(default_factory=Behaviour)
    overall_feedback: list[FeedbackRange] = Field(default_factory=list)
    not_enough_chars: str = DEFAULT_NOT_ENOUGH_CHARS


@dataclass(frozen=True)
class Match:
    """One detected occurrence of an alternative in an answer.

    Attributes:
        keyword: Alternative that matched (wildcards collapsed).
        match: Substring of the answer that was found.
        index: Absolute position of the match in the answer.
    """

    keyword: str
    match: str
    index: int


@dataclass(frozen=True)
class Alternative:
    """Alternative phrasing to look for.

    Literal alternatives come from regular expression matches; their
    asterisks are plain characters, not wildcards.
    """

    text: str
    literal: bool = False

    @property
    def has_wildcard(self) -> bool:
        return not self.literal and "*" in self.text

    def lower(self) -> "Alternative":
        return Alternative(text=self.text.lower(), literal=self.literal)


class Explanation(BaseModel):
    """Keyword explanation entry for the feedback panel."""

    model_config = ConfigDict(frozen=True)

    correct: str
    text: str


class EssayEvaluation(BaseModel):
    """Result of one scoring pass.

    Attributes:
        score: Points awarded, clamped to [0, max_score].
        max_score: Score needed for mastery (at least 1).
        passing_score: Score needed to pass.
        results: Matches per scored keyword group, in group order.
        explanations: Explanations, "included" entries first.
        feedback: Overall feedback text for the score range.
        passed: Whether the passing score was reached.
        mastered: Whether the maximum score was reached.
    """

    score: float
    max_score: float
    passing_score: float
    results: list[list[Match]] = Field(default_factory=list)
    explanations: list[Explanation] = Field(default_factory=list)
    feedback: str = ""
    passed: bool = False
    mastered: bool = False
