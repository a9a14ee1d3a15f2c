# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Essay match detectors."""

from h5p_essay.services.essay.detectors import (
    collapse_wildcards,
    compile_wildcard_pattern,
    contains,
    detect_exact_matches,
    detect_fuzzy_matches,
    detect_wildcard_matches,
)
from h5p_essay.services.essay.models import Match


class TestContains:
    """Tests for contains function."""

    def test_within_match_length(self) -> None:
        """Test positions within a recorded match's length."""
        results = [Match(keyword="cat", match="cat", index=4)]

        assert contains(results, 4) is True
        assert contains(results, 6) is True
        assert contains(results, 1) is True

    def test_outside_match_length(self) -> None:
        """Test positions further away than a match's length."""
        results = [Match(keyword="cat", match="cat", index=4)]

        assert contains(results, 8) is False
        assert contains(results, 0) is False

    def test_empty_results(self) -> None:
        """Test that nothing is contained in empty results."""
        assert contains([], 0) is False


class TestDetectExactMatches:
    """Tests for detect_exact_matches function."""

    def test_all_isolated_occurrences(self) -> None:
        """Test that every isolated occurrence is found with its position."""
        results = detect_exact_matches("cat", "the cat and the cat")

        assert [r.index for r in results] == [4, 16]
        assert all(r.match == "cat" and r.keyword == "cat" for r in results)

    def test_occurrences_inside_words_are_skipped(self) -> None:
        """Test that occurrences inside longer words are not matches."""
        assert detect_exact_matches("cat", "category concatenate") == []

    def test_isolation_checked_at_each_position(self) -> None:
        """Test that a later isolated occurrence is found after a non-isolated one."""
        results = detect_exact_matches("cat", "catcat cat")

        assert [r.index for r in results] == [7]

    def test_phrase(self) -> None:
        """Test that phrases are matched as a whole."""
        results = detect_exact_matches("solar energy", "Plants use solar energy.")

        assert [r.index for r in results] == [11]

    def test_wildcards_are_removed(self) -> None:
        """Test that asterisks are removed from non-literal needles."""
        results = detect_exact_matches("c*at*", "a cat")

        assert results == [Match(keyword="cat", match="cat", index=2)]

    def test_literal_asterisks_are_kept(self) -> None:
        """Test that literal needles keep their asterisks."""
        results = detect_exact_matches("a*b", "x a*b y", literal=True)

        assert results == [Match(keyword="a*b", match="a*b", index=2)]

    def test_needle_of_only_wildcards(self) -> None:
        """Test that a needle consisting of asterisks finds nothing."""
        assert detect_exact_matches("**", "a * b") == []

    def test_empty_haystack(self) -> None:
        """Test that an empty haystack gives no matches."""
        assert detect_exact_matches("cat", "") == []


class TestWildcardPatterns:
    """Tests for wildcard pattern helpers."""

    def test_collapse_wildcards(self) -> None:
        """Test that successive asterisks are collapsed."""
        assert collapse_wildcards("c***t*") == "c*t*"
        assert collapse_wildcards("cat") == "cat"

    def test_pattern_escapes_other_characters(self) -> None:
        """Test that non-asterisk characters are matched literally."""
        pattern = compile_wildcard_pattern("a.*")

        assert pattern.fullmatch("a.b") is not None
        assert pattern.fullmatch("axb") is None

    def test_wildcard_needs_at_least_one_letter(self) -> None:
        """Test that an asterisk matches one or more letters only."""
        pattern = compile_wildcard_pattern("c*t")

        assert pattern.fullmatch("ct") is None
        assert pattern.fullmatch("c3t") is None
        assert pattern.fullmatch("c t") is None
        assert pattern.fullmatch("cart") is not None

    def test_case_insensitive_pattern(self) -> None:
        """Test that case_sensitive=False ignores case."""
        pattern = compile_wildcard_pattern("C*T", case_sensitive=False)

        assert pattern.fullmatch("cat") is not None


class TestDetectWildcardMatches:
    """Tests for detect_wildcard_matches function."""

    def test_letters_are_matched(self) -> None:
        """Test that the asterisk stands for letters."""
        results = detect_wildcard_matches("c*t", "cat cot cart c3t")

        assert [(r.match, r.index) for r in results] == [("cat", 0), ("cot", 4), ("cart", 8)]
        assert all(r.keyword == "c*t" for r in results)

    def test_case_insensitive_sentence(self) -> None:
        """Test that only isolated letter runs match in a sentence."""
        results = detect_wildcard_matches("c*t", "the cat sat the cot", case_sensitive=False)

        assert [(r.match, r.index) for r in results] == [("cat", 4), ("cot", 16)]

    def test_keyword_has_collapsed_wildcards(self) -> None:
        """Test that the reported keyword has successive asterisks collapsed."""
        results = detect_wildcard_matches("c**t", "a cat")

        assert results == [Match(keyword="c*t", match="cat", index=2)]

    def test_non_isolated_matches_are_skipped(self) -> None:
        """Test that matches inside longer words are not reported."""
        assert detect_wildcard_matches("c*t", "cats") == []

    def test_needle_without_wildcard(self) -> None:
        """Test that needles without asterisk give no wildcard matches."""
        assert detect_wildcard_matches("cat", "cat") == []

    def test_case_insensitive(self) -> None:
        """Test case-insensitive wildcard matching."""
        results = detect_wildcard_matches("C*T", "the cat", case_sensitive=False)

        assert [(r.match, r.index) for r in results] == [("cat", 4)]

    def test_non_ascii_letters(self) -> None:
        """Test that the asterisk covers accented and non-Latin letters."""
        assert [r.match for r in detect_wildcard_matches("gr*n", "grün")] == ["grün"]
        assert [r.match for r in detect_wildcard_matches("к*т", "кот")] == ["кот"]

    def test_precompiled_pattern(self) -> None:
        """Test that a given pattern is used for matching."""
        pattern = compile_wildcard_pattern("c*t")

        results = detect_wildcard_matches("c*t", "a cot", pattern=pattern)

        assert [r.match for r in results] == ["cot"]


class TestDetectFuzzyMatches:
    """Tests for detect_fuzzy_matches function."""

    def test_misspelled_word(self) -> None:
        """Test that a misspelled word is found once."""
        results = detect_fuzzy_matches("photosynthesis", "the fotosynthesis process")

        assert results == [Match(keyword="photosynthesis", match="fotosynthesis", index=4)]

    def test_exact_occurrence_reported_once(self) -> None:
        """Test that windows of different sizes do not duplicate an occurrence."""
        results = detect_fuzzy_matches("interactive", "very interactive")

        assert [r.index for r in results] == [5]

    def test_short_words_need_exact_spelling(self) -> None:
        """Test that short needles do not match misspellings."""
        assert detect_fuzzy_matches("cat", "the cot") == []

    def test_several_occurrences(self) -> None:
        """Test that separate occurrences are all reported."""
        results = detect_fuzzy_matches("interactive", "interactiv and interactve")

        assert [r.index for r in results] == [0, 15]

    def test_empty_needle(self) -> None:
        """Test that an empty needle gives no matches."""
        assert detect_fuzzy_matches("", "text") == []
