# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Match merging and per-keyword-group matching.

A keyword group is matched by expanding it into alternatives and running
the detectors for each of them:

1. The keyword and its alternatives are HTML-decoded.
2. Regular expression alternatives ("/.../") are run against the answer;
   every substring they match becomes a literal alternative.
3. For each alternative, exact, wildcard and fuzzy matches are merged,
   earlier strategies winning contested positions.
4. Merged matches of all alternatives are concatenated.
"""

import html
import logging
import re
from dataclasses import dataclass, field

from h5p_essay.services.essay.detectors import (
    compile_wildcard_pattern,
    contains,
    detect_exact_matches,
    detect_fuzzy_matches,
    detect_wildcard_matches,
)
from h5p_essay.services.essay.exceptions import MalformedPatternError
from h5p_essay.services.essay.models import Alternative, KeywordGroup, Match

logger = logging.getLogger(__name__)

REGEX_DELIMITER = "/"

_HTML_TAG = re.compile(r"<[^>]*>")


def html_decode(text: str) -> str:
    """Get the plain text of an HTML encoded string."""
    return html.unescape(_HTML_TAG.sub("", text))


def is_regex_alternative(alternative: str) -> bool:
    """Check if an alternative is a regular expression literal like /colou?r/."""
    return (
        len(alternative) >= 2
        and alternative.startswith(REGEX_DELIMITER)
        and alternative.endswith(REGEX_DELIMITER)
    )


def merge_matches(*match_lists: list[Match]) -> list[Match]:
    """Merge matches of several detectors without duplicates.

    All matches of the first list are kept. Matches of later lists are
    only added if no match was recorded close to their position.

    Args:
        *match_lists: Detected matches, in order of precedence.

    Returns:
        Merged matches sorted by position.
    """
    if not match_lists:
        return []

    results = list(match_lists[0])
    for matches in match_lists[1:]:
        for match in matches:
            if not contains(results, match.index):
                results.append(match)
    return sorted(results, key=lambda match: match.index)


@dataclass
class GroupMatcher:
    """Matcher for one keyword group.

    Build it with GroupMatcher.build() so that regular expression
    alternatives are validated once, before any answer is matched.

    Attributes:
        group: Keyword group configuration.
        case_sensitive: Effective case sensitivity.
        forgive_mistakes: Effective fuzzy matching flag.
        alternatives: Decoded plain and wildcard alternatives.
        patterns: Compiled regular expression alternatives.
    """

    group: KeywordGroup
    case_sensitive: bool
    forgive_mistakes: bool
    alternatives: list[Alternative] = field(default_factory=list)
    patterns: list[re.Pattern[str]] = field(default_factory=list)
    _wildcard_patterns: dict[str, re.Pattern[str]] = field(default_factory=dict, init=False, repr=False)

    @classmethod
    def build(
        cls,
        group: KeywordGroup,
        case_sensitive: bool,
        forgive_mistakes: bool,
    ) -> "GroupMatcher":
        """Create a matcher, compiling regular expression alternatives.

        Raises:
            MalformedPatternError: If a regular expression alternative is invalid.
        """
        flags = 0 if case_sensitive else re.IGNORECASE
        alternatives: list[Alternative] = []
        patterns: list[re.Pattern[str]] = []

        for raw in [group.keyword or "", *group.alternatives]:
            decoded = html_decode(raw)
            if is_regex_alternative(decoded):
                source = decoded[1:-1]
                try:
                    patterns.append(re.compile(source, flags))
                except re.error as e:
                    raise MalformedPatternError(
                        message=f"Invalid regular expression alternative: {e}",
                        pattern=source,
                        keyword=group.keyword,
                    ) from e
            elif decoded:
                alternatives.append(Alternative(text=decoded))

        return cls(
            group=group,
            case_sensitive=case_sensitive,
            forgive_mistakes=forgive_mistakes,
            alternatives=alternatives,
            patterns=patterns,
        )

    def expand_alternatives(self, answer: str) -> list[Alternative]:
        """Get all alternatives for an answer.

        Substrings matched by regular expression alternatives are appended
        as literal alternatives. Empty matches are dropped.

        Args:
            answer: Normalized answer, before case folding.

        Returns:
            Alternatives to detect, plain ones first.
        """
        expanded = list(self.alternatives)
        for pattern in self.patterns:
            for found in pattern.finditer(answer):
                if found.group(0):
                    expanded.append(Alternative(text=found.group(0), literal=True))
        return expanded

    def find_matches(self, answer: str) -> list[Match]:
        """Detect all matches of the group's alternatives in an answer.

        Matches of different alternatives are not de-duplicated against
        each other; each alternative found counts.

        Args:
            answer: Normalized answer.

        Returns:
            Matches per alternative, concatenated in alternative order.
        """
        alternatives = self.expand_alternatives(answer)
        haystack = answer
        if not self.case_sensitive:
            alternatives = [alternative.lower() for alternative in alternatives]
            haystack = answer.lower()

        results: list[Match] = []
        for alternative in alternatives:
            needle = alternative.text
            matches_exact = detect_exact_matches(needle, haystack, literal=alternative.literal)
            matches_wildcard = (
                detect_wildcard_matches(
                    needle,
                    haystack,
                    case_sensitive=self.case_sensitive,
                    pattern=self._wildcard_pattern(needle),
                )
                if alternative.has_wildcard
                else []
            )
            matches_fuzzy = (
                detect_fuzzy_matches(needle, haystack) if self.forgive_mistakes else []
            )
            results.extend(merge_matches(matches_exact, matches_wildcard, matches_fuzzy))

        logger.debug(
            "Keyword group %r: %d alternatives, %d matches",
            self.group.keyword,
            len(alternatives),
            len(results),
        )
        return results

    def _wildcard_pattern(self, needle: str) -> re.Pattern[str]:
        pattern = self._wildcard_patterns.get(needle)
        if pattern is None:
            pattern = compile_wildcard_pattern(needle, self.case_sensitive)
            self._wildcard_patterns[needle] = pattern
        return pattern
