# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Text utilities for approximate string matching.

This module provides the string similarity layer used by the Essay match
detectors:
- levenshtein_distance: (Damerau-)Levenshtein edit distance
- are_similar: Fixed tolerance table on top of the edit distance
- jaro_winkler_distance: Jaro(-Winkler) similarity in [0, 1]
- is_isolated: Check that a substring is delimited like a word
- fuzzy_find and helpers: Locate an approximate occurrence in a text

All functions raise InvalidArgumentError for non-string input instead of
returning a falsy sentinel.

Example:
    >>> from h5p_essay.services.essay.text_utils import are_similar, is_isolated
    >>> are_similar("kitten", "sitten")
    True
    >>> is_isolated("cat", "category")
    False
"""

import re
from dataclasses import dataclass

from rapidfuzz.distance import OSA, Levenshtein

from h5p_essay.services.essay.exceptions import InvalidArgumentError

# Whitespace and . ? ! , ; ' "
WORD_DELIMITER = re.compile(r"[\s.?!,;'\"]")

# Tolerance table for are_similar. Empirical values, kept for compatibility
# with H5P Essay scoring.
SIMILAR_LONG_LENGTH = 9
SIMILAR_LONG_MAX_DISTANCE = 2
SIMILAR_SHORT_LENGTH = 3
SIMILAR_SHORT_MAX_DISTANCE = 1

# Winkler prefix bonus
WINKLER_PREFIX_LENGTH = 4
WINKLER_SCALING_FACTOR = 0.1


@dataclass(frozen=True)
class FuzzyFindResult:
    """Approximate occurrence of a needle in a text.

    Attributes:
        match: Substring of the text that was considered similar.
        index: Position of the match in the text.
    """

    match: str
    index: int


def _require_str(value: object, argument: str) -> None:
    if not isinstance(value, str):
        raise InvalidArgumentError(
            message="Expected a string",
            argument=argument,
            received_type=type(value).__name__,
        )


def levenshtein_distance(str1: str, str2: str, count_swapping: bool = False) -> int:
    """Compute the (Damerau-)Levenshtein distance for two strings.

    The distance is the number of operations necessary to transform one
    string into the other: deletions, insertions and mismatches. With
    count_swapping, swapping two adjacent characters also counts as a
    single operation (optimal string alignment variant).

    Args:
        str1: String no. 1.
        str2: String no. 2.
        count_swapping: If True, an adjacent transposition costs one operation.

    Returns:
        Edit distance, 0 for identical strings.

    Raises:
        InvalidArgumentError: If either input is not a string.
    """
    _require_str(str1, "str1")
    _require_str(str2, "str2")

    if count_swapping:
        return OSA.distance(str1, str2)
    return Levenshtein.distance(str1, str2)


def are_similar(str1: str, str2: str) -> bool:
    """Check whether two strings are considered to be similar.

    Similarity is decided by the length of the shorter string and the
    Damerau-Levenshtein distance:
    - identical strings are always similar
    - more than 9 characters: up to 2 operations
    - more than 3 characters: up to 1 operation

    Args:
        str1: String no. 1.
        str2: String no. 2.

    Returns:
        True if the strings are similar. Empty strings never are.

    Raises:
        InvalidArgumentError: If either input is not a string.
    """
    _require_str(str1, "str1")
    _require_str(str2, "str2")
    if not str1 or not str2:
        return False

    length = min(len(str1), len(str2))
    distance = levenshtein_distance(str1, str2, count_swapping=True)
    if distance == 0:
        return True
    if length > SIMILAR_LONG_LENGTH and distance <= SIMILAR_LONG_MAX_DISTANCE:
        return True
    if length > SIMILAR_SHORT_LENGTH and distance <= SIMILAR_SHORT_MAX_DISTANCE:
        return True
    return False


def jaro_winkler_distance(
    str1: str,
    str2: str,
    favor_same_start: bool = False,
    long_tolerance: bool = False,
) -> float:
    """Compute the Jaro(-Winkler) distance for two strings.

    Returns a value between 0 and 1; higher values mean more similar strings.

    Args:
        str1: String no. 1.
        str2: String no. 2.
        favor_same_start: Apply Winkler's common-prefix bonus.
        long_tolerance: Apply Winkler's adjustment for long strings
            (only together with favor_same_start).

    Returns:
        Similarity in [0, 1].

    Raises:
        InvalidArgumentError: If either input is not a string.
    """
    _require_str(str1, "str1")
    _require_str(str2, "str2")

    if not str1 or not str2:
        return 0.0
    if str1 == str2:
        return 1.0

    len1 = len(str1)
    len2 = len(str2)
    match_window = max(len1, len2) // 2 - 1

    flags1 = [False] * len1
    flags2 = [False] * len2
    matches = 0

    for i in range(len1):
        start = i - match_window if i >= match_window else 0
        end = min(i + match_window, len2 - 1)
        for j in range(start, end + 1):
            if not flags1[i] and not flags2[j] and str1[i] == str2[j]:
                flags1[i] = flags2[j] = True
                matches += 1
                break

    if matches == 0:
        return 0.0

    transpositions = 0
    k = 0
    for i in range(len1):
        if not flags1[i]:
            continue
        while not flags2[k]:
            k += 1
        if str1[i] != str2[k]:
            transpositions += 1
        k += 1
    transpositions /= 2

    distance = (matches / len1 + matches / len2 + (matches - transpositions) / matches) / 3

    if favor_same_start and distance > 0.7 and len1 > 3 and len2 > 3:
        prefix = 0
        while prefix < WINKLER_PREFIX_LENGTH and str1[prefix] == str2[prefix]:
            prefix += 1
        distance += prefix * WINKLER_SCALING_FACTOR * (1 - distance)

        longest = max(len1, len2)
        if (
            long_tolerance
            and longest > 4
            and matches > prefix + 1
            and 2 * matches >= longest + prefix
        ):
            distance += (1.0 - distance) * (
                (matches - prefix - 1) / (len1 + len2 - 2 * prefix + 2)
            )

    return distance


def is_isolated(
    candidate: str,
    text: str,
    delimiter: re.Pattern[str] = WORD_DELIMITER,
    index: int | None = None,
) -> bool:
    """Check if a candidate occurs in a text as an isolated token.

    The candidate is isolated if the characters right before and right
    after it are either absent (string boundary) or delimiters.

    Args:
        candidate: String to be looked for.
        text: Larger string that should contain the candidate.
        delimiter: Pattern matching a single delimiter character.
        index: Position of the candidate in the text. If None, the first
            occurrence is used.

    Returns:
        True if the candidate is isolated at that position.

    Raises:
        InvalidArgumentError: If candidate or text is not a string.
    """
    _require_str(candidate, "candidate")
    _require_str(text, "text")
    if not candidate or not text:
        return False

    pos = text.find(candidate) if index is None else index
    if pos < 0 or pos > len(text) - 1:
        return False

    end = pos + len(candidate)
    before = text[pos - 1] if pos > 0 else ""
    after = text[end] if end < len(text) else ""

    if before and not delimiter.fullmatch(before):
        return False
    if after and not delimiter.fullmatch(after):
        return False
    return True


def fuzzy_find(needle: str, haystack: str, window_size: int = 3) -> FuzzyFindResult | None:
    """Find the first approximate occurrence of a needle in a text.

    Single words are compared first. For phrases, windows of the needle's
    length plus 0..window_size-1 characters are moved over the text; a window
    must be isolated and similar to the needle. This is slow for long texts.

    Args:
        needle: String to look for.
        haystack: Text to look in.
        window_size: Number of window lengths to try per position.

    Returns:
        The first match with its position, or None.

    Raises:
        InvalidArgumentError: If needle or haystack is not a string.
    """
    _require_str(needle, "needle")
    _require_str(haystack, "haystack")
    if not needle or not haystack:
        return None

    for word in haystack.split(" "):
        if are_similar(needle, word):
            return FuzzyFindResult(match=word, index=haystack.find(word))

    for pos in range(len(haystack) - len(needle) + 1):
        for extra in range(window_size):
            straw = haystack[pos:pos + len(needle) + extra]
            if is_isolated(straw, haystack, index=pos) and are_similar(straw, needle):
                return FuzzyFindResult(match=straw, index=pos)

    return None


def fuzzy_contains(needle: str, haystack: str) -> bool:
    """Check whether a text contains a string, but fuzzy."""
    return fuzzy_find(needle, haystack) is not None


def fuzzy_index_of(needle: str, haystack: str) -> int:
    """Get the position of the first fuzzy match, -1 if there is none."""
    result = fuzzy_find(needle, haystack)
    return result.index if result else -1


def fuzzy_match(needle: str, haystack: str) -> str | None:
    """Get the first fuzzy match of a string within a text."""
    result = fuzzy_find(needle, haystack)
    return result.match if result else None
