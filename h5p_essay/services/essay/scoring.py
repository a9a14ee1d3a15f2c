# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Essay scoring engine.

EssayScorer turns a learner's free-text answer into a score and keyword
explanations for one Essay task:

    >>> scorer = EssayScorer(task)
    >>> evaluation = scorer.evaluate("Plants use sunlight and chlorophyll ...")
    >>> evaluation.score, evaluation.max_score
    (3.0, 5.0)

The scorer validates the task when it is created (regular expression
alternatives are compiled then) and keeps no state between evaluations,
so evaluating the same answer twice yields the same result.

Score rules:
- Each keyword group contributes min(matches, occurrences) * points.
- The total is clamped to [0, max_score].
- max_score = max(1, mastery score); the mastery score is
  percentage_mastering of the theoretical maximum, or the maximum itself.
- With ignore_scoring, the learner always gets max_score = points_host.
"""

import logging
import math
import re

from h5p_essay.core.config.settings import ScoringSettings, get_settings
from h5p_essay.services.essay.exceptions import AnswerTooShortError
from h5p_essay.services.essay.matching import GroupMatcher
from h5p_essay.services.essay.models import (
    EssayEvaluation,
    EssayTask,
    Explanation,
    FeedbackWord,
    KeywordGroup,
    Match,
    Override,
)

logger = logging.getLogger(__name__)

# H5P explanations only know correct/incorrect, this renders neutral
FEEDBACK_EMPTY = '<span class="h5p-essay-feedback-empty">...</span>'

_LINEBREAK = re.compile(r"\r\n|\r|\n")
_DOUBLE_WHITESPACE = re.compile(r"\s\s")


def normalize_answer(text: str, linebreak_replacement: str = " ") -> str:
    """Prepare an answer for matching.

    Line breaks are replaced, then every pair of whitespace characters
    is reduced to a single space.

    Args:
        text: Answer as typed by the learner.
        linebreak_replacement: Replacement for line breaks.

    Returns:
        Normalized answer.
    """
    replacement = linebreak_replacement or " "
    text = _LINEBREAK.sub(lambda _: replacement, text)
    return _DOUBLE_WHITESPACE.sub(" ", text)


def resolve_option(task_override: str, site_override: str, option: bool) -> bool:
    """Resolve a keyword option against task and site overrides.

    The task override wins unless it is "default", in which case the site
    override applies. "on" and "off" force the option; "default" keeps it.
    """
    override = Override(task_override)
    if override == Override.DEFAULT:
        override = Override(site_override)
    return override != Override.OFF and (override == Override.ON or option)


def _format_points(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class EssayScorer:
    """Scores answers for one Essay task.

    Attributes:
        task: Task configuration.
        settings: Site-level scoring settings.
        keywords: Keyword groups that are scored (groups with a keyword).
    """

    def __init__(self, task: EssayTask, settings: ScoringSettings | None = None) -> None:
        """Initialize the scorer.

        Args:
            task: Task configuration.
            settings: Site-level scoring settings, defaults to get_settings().scoring.

        Raises:
            MalformedPatternError: If a regular expression alternative is invalid.
        """
        self.task = task
        self.settings = settings or get_settings().scoring

        self.keywords: list[KeywordGroup] = [
            group for group in task.keywords if group.keyword is not None
        ]
        skipped = len(task.keywords) - len(self.keywords)
        if skipped:
            logger.debug("Skipping %d keyword groups without keyword", skipped)

        behaviour = task.behaviour
        self._matchers = [
            GroupMatcher.build(
                group,
                case_sensitive=resolve_option(
                    behaviour.override_case_sensitive,
                    self.settings.override_case_sensitive,
                    group.options.case_sensitive,
                ),
                forgive_mistakes=resolve_option(
                    behaviour.override_forgive_mistakes,
                    self.settings.override_forgive_mistakes,
                    group.options.forgive_mistakes,
                ),
            )
            for group in self.keywords
        ]

    @property
    def score_max(self) -> float:
        """Theoretical maximum: all groups with all occurrences."""
        return sum(group.max_points for group in self.keywords)

    @property
    def score_mastering(self) -> float:
        """Score indicating mastery, may be below score_max."""
        percentage = self.task.behaviour.percentage_mastering
        if percentage is None:
            return self.score_max
        return percentage * self.score_max / 100

    @property
    def max_score(self) -> float:
        """Maximum score reported for the task."""
        behaviour = self.task.behaviour
        if behaviour.ignore_scoring:
            return behaviour.points_host or 1
        return max(1, self.score_mastering)

    @property
    def passing_score(self) -> float:
        """Score needed to pass, never above max_score."""
        percentage = self.task.behaviour.percentage_passing or 0
        return min(self.max_score, percentage * self.score_max / 100)

    def normalize(self, answer: str) -> str:
        """Normalize an answer with the task's (or site's) line break replacement."""
        replacement = self.task.behaviour.linebreak_replacement
        if replacement is None:
            replacement = self.settings.linebreak_replacement
        return normalize_answer(answer, replacement)

    def check_length(self, answer: str) -> None:
        """Check the answer against the minimum length.

        Raises:
            AnswerTooShortError: With the learner-facing message.
        """
        minimum = self.task.behaviour.effective_minimum_length
        if len(answer) < minimum:
            raise AnswerTooShortError(
                message=self.task.not_enough_chars.replace("@chars", str(minimum)),
                minimum_length=minimum,
                actual_length=len(answer),
            )

    def compute_results(self, answer: str) -> list[list[Match]]:
        """Detect the matches of every keyword group.

        Args:
            answer: Answer as typed by the learner.

        Returns:
            One list of matches per scored keyword group.
        """
        text = self.normalize(answer)
        return [matcher.find_matches(text) for matcher in self._matchers]

    def compute_score(self, results: list[list[Match]]) -> float:
        """Compute the raw score for results of compute_results.

        Each group counts at most `occurrences` matches.
        """
        return sum(
            min(len(matches), group.options.occurrences) * group.options.points
            for group, matches in zip(self.keywords, results, strict=True)
        )

    def build_explanations(self, results: list[list[Match]]) -> list[Explanation]:
        """Build keyword explanations for results of compute_results.

        Groups with feedback for the missed case get an entry if nothing
        was found; groups with feedback for the included case get one if
        something was found. Included entries come first.

        Args:
            results: Matches per scored keyword group.

        Returns:
            Explanations in display order.
        """
        explanations: list[Explanation] = []

        for group, matches in zip(self.keywords, results, strict=True):
            options = group.options
            word = FEEDBACK_EMPTY

            if not matches and options.feedback_missed:
                if options.feedback_missed_word == FeedbackWord.KEYWORD:
                    word = group.keyword
                explanations.append(Explanation(correct=word, text=options.feedback_missed))

            if matches and options.feedback_included:
                if options.feedback_included_word == FeedbackWord.KEYWORD:
                    word = group.keyword
                elif options.feedback_included_word == FeedbackWord.ALTERNATIVE:
                    word = matches[0].keyword
                elif options.feedback_included_word == FeedbackWord.ANSWER:
                    word = matches[0].match
                explanations.append(Explanation(correct=word, text=options.feedback_included))

        return sorted(explanations, key=lambda explanation: explanation.correct == FEEDBACK_EMPTY)

    def determine_overall_feedback(self, score: float) -> str:
        """Get the overall feedback text for a score.

        The first range containing the score percentage (rounded down)
        with a non-blank feedback wins. "@score" and "@total" are replaced.

        Returns:
            Feedback text, empty if no range applies.
        """
        ratio = math.floor(score / self.max_score * 100)
        for feedback_range in self.task.overall_feedback:
            text = feedback_range.feedback
            if text and text.strip() and feedback_range.from_ <= ratio <= feedback_range.to:
                return text.replace("@score", _format_points(score)).replace(
                    "@total", _format_points(self.max_score)
                )
        return ""

    def evaluate(self, answer: str) -> EssayEvaluation:
        """Run a complete scoring pass for an answer.

        Args:
            answer: Answer as typed by the learner.

        Returns:
            Score, explanations and feedback.

        Raises:
            AnswerTooShortError: If the answer is below the minimum length.
        """
        self.check_length(answer)

        results = self.compute_results(answer)
        max_score = self.max_score
        if self.task.behaviour.ignore_scoring:
            score = max_score
        else:
            score = max(0, min(self.compute_score(results), max_score))

        passed = self.task.behaviour.ignore_scoring or score >= self.passing_score
        logger.debug(
            "Essay scored %s/%s (%d groups, passed=%s)",
            _format_points(score),
            _format_points(max_score),
            len(results),
            passed,
        )

        return EssayEvaluation(
            score=score,
            max_score=max_score,
            passing_score=self.passing_score,
            results=results,
            explanations=self.build_explanations(results),
            feedback=self.determine_overall_feedback(score),
            passed=passed,
            mastered=score >= max_score,
        )


def evaluate_answer(
    task: EssayTask,
    answer: str,
    settings: ScoringSettings | None = None,
) -> EssayEvaluation:
    """Convenience function for scoring a single answer.

    Args:
        task: Task configuration.
        answer: Answer as typed by the learner.
        settings: Site-level scoring settings.

    Returns:
        Evaluation of the answer.
    """
    return EssayScorer(task, settings).evaluate(answer)
