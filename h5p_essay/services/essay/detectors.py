# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Match detectors for Essay keyword alternatives.

Three independent strategies scan an answer for one alternative:
- detect_exact_matches: Plain substring occurrences
- detect_wildcard_matches: "*" stands for one or more letters
- detect_fuzzy_matches: Approximate occurrences (see text_utils.are_similar)

Every detector only reports occurrences that are isolated tokens and
returns Match objects whose index is the absolute position in the answer.
"""

import re
from collections.abc import Iterable

from h5p_essay.services.essay.models import Match
from h5p_essay.services.essay.text_utils import are_similar, is_isolated

# Letters only, so wildcards do not swallow digits, punctuation or spaces:
# ASCII, Latin-1 letters, Greek, Cyrillic, Hiragana/Katakana, common CJK, Thai.
WILDCARD_CHARS = (
    "[A-Za-z"
    "\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u00FF"
    "\u0370-\u03FF"
    "\u0400-\u04FF"
    "\u3040-\u30FF"
    "\u4E00-\u9FFF"
    "\u0E00-\u0E7F"
    "]"
)

# Window sizes -2..2 around the needle length
FUZZY_WINDOW_SIZE = 2

_SUCCESSIVE_WILDCARDS = re.compile(r"\*{2,}")


def contains(results: Iterable[Match], index: int) -> bool:
    """Check if a match was already recorded in the proximity of index.

    Used to prevent double entries for the same occurrence, e.g. when
    fuzzy matching finds it with several window sizes.

    Args:
        results: Matches recorded so far.
        index: Position to check.

    Returns:
        True if any recorded match starts within its own length of index.
    """
    return any(abs(result.index - index) <= len(result.match) for result in results)


def detect_exact_matches(needle: str, haystack: str, literal: bool = False) -> list[Match]:
    """Detect exact matches of needle in haystack.

    Args:
        needle: Word or phrase to find.
        haystack: Text to find the word or phrase in.
        literal: If False, wildcard asterisks are removed from the needle
            (wildcards are detected separately).

    Returns:
        Matches in order of appearance.
    """
    if not literal:
        needle = needle.replace("*", "")

    results: list[Match] = []
    if not needle:
        return results

    pos = haystack.find(needle)
    while pos != -1:
        if is_isolated(needle, haystack, index=pos):
            results.append(Match(keyword=needle, match=needle, index=pos))
        pos = haystack.find(needle, pos + len(needle))
    return results


def collapse_wildcards(needle: str) -> str:
    """Replace successive asterisks with a single one."""
    return _SUCCESSIVE_WILDCARDS.sub("*", needle)


def compile_wildcard_pattern(needle: str, case_sensitive: bool = True) -> re.Pattern[str]:
    """Compile a wildcard needle into a regular expression.

    Everything but the asterisk is matched literally; each asterisk
    matches one or more WILDCARD_CHARS.

    Args:
        needle: Alternative containing asterisks.
        case_sensitive: If False, the pattern ignores case.

    Returns:
        Compiled pattern.
    """
    parts = collapse_wildcards(needle).split("*")
    source = (WILDCARD_CHARS + "+").join(re.escape(part) for part in parts)
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(source, flags)


def detect_wildcard_matches(
    needle: str,
    haystack: str,
    case_sensitive: bool = True,
    pattern: re.Pattern[str] | None = None,
) -> list[Match]:
    """Detect wildcard matches of needle in haystack.

    Args:
        needle: Word or phrase with asterisks to find.
        haystack: Text to find the word or phrase in.
        case_sensitive: If False, matching ignores case.
        pattern: Precompiled pattern for needle, see compile_wildcard_pattern.

    Returns:
        Matches in order of appearance, empty if needle has no wildcard.
    """
    if "*" not in needle:
        return []

    keyword = collapse_wildcards(needle)
    if pattern is None:
        pattern = compile_wildcard_pattern(keyword, case_sensitive)

    results: list[Match] = []
    for found in pattern.finditer(haystack):
        if is_isolated(found.group(0), haystack, index=found.start()):
            results.append(Match(keyword=keyword, match=found.group(0), index=found.start()))
    return results


def detect_fuzzy_matches(
    needle: str,
    haystack: str,
    window_size: int = FUZZY_WINDOW_SIZE,
) -> list[Match]:
    """Detect fuzzy matches of needle in haystack.

    Phrases cannot simply be split into words, so every window of
    len(needle) - window_size .. len(needle) + window_size characters at
    every position is compared. Learner answers are paragraph-sized, which
    keeps this exhaustive scan acceptable.

    Args:
        needle: Word or phrase to find.
        haystack: Text to find the word or phrase in.
        window_size: Maximum difference between needle and window length.

    Returns:
        Matches, at most one per occurrence.
    """
    results: list[Match] = []
    if not needle:
        return results

    for size in range(-window_size, window_size + 1):
        length = len(needle) + size
        if length <= 0:
            continue
        for pos in range(len(haystack)):
            straw = haystack[pos:pos + length]
            if not is_isolated(straw, haystack, index=pos):
                continue
            if are_similar(needle, straw) and not contains(results, pos):
                results.append(Match(keyword=needle, match=straw, index=pos))
    return results
