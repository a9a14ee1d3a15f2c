# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Essay exceptions."""

import pytest

from h5p_essay.services.essay.exceptions import (
    AnswerTooShortError,
    EssayConfigurationError,
    EssayError,
    InvalidArgumentError,
    MalformedPatternError,
)


class TestEssayError:
    """Tests for the base exception."""

    def test_message_only(self) -> None:
        """Test string representation without details."""
        assert str(EssayError("Something failed")) == "Something failed"

    def test_with_details(self) -> None:
        """Test string representation with details."""
        error = EssayError("Something failed", details={"task": "essay-1"})

        assert str(error) == "Something failed - Details: {'task': 'essay-1'}"

    @pytest.mark.parametrize(
        "error",
        [
            InvalidArgumentError("Expected a string"),
            MalformedPatternError("Bad pattern"),
            EssayConfigurationError("Bad task"),
            AnswerTooShortError("Too short", minimum_length=10, actual_length=3),
        ],
    )
    def test_hierarchy(self, error: EssayError) -> None:
        """Test that all errors derive from EssayError."""
        assert isinstance(error, EssayError)


class TestInvalidArgumentError:
    """Tests for InvalidArgumentError."""

    def test_str_with_argument(self) -> None:
        """Test that argument name and type are shown."""
        error = InvalidArgumentError("Expected a string", argument="needle", received_type="int")

        assert str(error) == "Expected a string (argument: needle, got int)"

    def test_is_type_error(self) -> None:
        """Test that the error is a TypeError."""
        assert isinstance(InvalidArgumentError("Expected a string"), TypeError)


class TestMalformedPatternError:
    """Tests for MalformedPatternError."""

    def test_str_with_context(self) -> None:
        """Test that keyword and pattern are shown."""
        error = MalformedPatternError("Invalid", pattern="(cat", keyword="cat")

        assert str(error) == "[cat] Invalid (pattern: /(cat/)"


class TestEssayConfigurationError:
    """Tests for EssayConfigurationError."""

    def test_str_with_validation_errors(self) -> None:
        """Test that source and validation errors are shown."""
        error = EssayConfigurationError(
            "Invalid Essay task params",
            source="task.yaml",
            validation_errors=["keywords.0.options.points: too small", "behaviour: bad"],
        )

        assert str(error) == (
            "[task.yaml] Invalid Essay task params - Errors: "
            "keywords.0.options.points: too small; behaviour: bad"
        )

    def test_defaults(self) -> None:
        """Test default attribute values."""
        error = EssayConfigurationError("Bad task")

        assert error.source is None
        assert error.validation_errors == []
