# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Custom exceptions for the Essay scoring service.

This module defines the exception hierarchy for Essay scoring:
- EssayError: Base exception for all Essay-related errors
- InvalidArgumentError: Non-string input to a text utility
- MalformedPatternError: Regular expression alternative that does not compile
- EssayConfigurationError: Task params that cannot be parsed or loaded
- AnswerTooShortError: Learner answer below the minimum length
"""


class EssayError(Exception):
    """Base exception for all Essay-related errors.

    All Essay service exceptions inherit from this base class,
    allowing for broad exception catching when needed.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict | None = None):
        """Initialize Essay error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class InvalidArgumentError(EssayError, TypeError):
    """Invalid argument passed to a text utility.

    Raised when a string utility receives something that is not a string.

    Attributes:
        argument: Name of the offending argument.
        received_type: Type name of the value that was received.
    """

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        received_type: str | None = None,
        details: dict | None = None,
    ):
        """Initialize invalid argument error.

        Args:
            message: Human-readable error description.
            argument: Name of the offending argument.
            received_type: Type name of the value that was received.
            details: Optional dictionary with additional error context.
        """
        self.argument = argument
        self.received_type = received_type
        super().__init__(message, details)

    def __str__(self) -> str:
        """Return string representation with the argument name."""
        base = self.message
        if self.argument:
            base = f"{base} (argument: {self.argument}"
            if self.received_type:
                base = f"{base}, got {self.received_type}"
            base = f"{base})"
        return base


class MalformedPatternError(EssayError):
    """Regular expression alternative with invalid syntax.

    Raised when a task is loaded into a scorer, so that authoring
    mistakes surface before any learner answer is evaluated.

    Attributes:
        pattern: The regular expression source that failed to compile.
        keyword: The keyword of the group the pattern belongs to.
    """

    def __init__(
        self,
        message: str,
        pattern: str | None = None,
        keyword: str | None = None,
        details: dict | None = None,
    ):
        """Initialize malformed pattern error.

        Args:
            message: Human-readable error description.
            pattern: The regular expression source that failed to compile.
            keyword: The keyword of the group the pattern belongs to.
            details: Optional dictionary with additional error context.
        """
        self.pattern = pattern
        self.keyword = keyword
        super().__init__(message, details)

    def __str__(self) -> str:
        """Return string representation with pattern context."""
        base = self.message
        if self.keyword:
            base = f"[{self.keyword}] {base}"
        if self.pattern is not None:
            base = f"{base} (pattern: /{self.pattern}/)"
        return base


class EssayConfigurationError(EssayError):
    """Essay task configuration could not be loaded.

    Raised when task params fail validation or a task file cannot be read.

    Attributes:
        source: Where the configuration came from (file path or description).
        validation_errors: List of specific validation errors.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        validation_errors: list[str] | None = None,
        details: dict | None = None,
    ):
        """Initialize Essay configuration error.

        Args:
            message: Human-readable error description.
            source: Where the configuration came from.
            validation_errors: List of specific validation errors.
            details: Optional dictionary with additional error context.
        """
        self.source = source
        self.validation_errors = validation_errors or []
        super().__init__(message, details)

    def __str__(self) -> str:
        """Return string representation with validation errors."""
        base = self.message
        if self.source:
            base = f"[{self.source}] {base}"
        if self.validation_errors:
            errors = "; ".join(self.validation_errors)
            base = f"{base} - Errors: {errors}"
        return base


class AnswerTooShortError(EssayError):
    """Learner answer is shorter than the task's minimum length.

    The message is the task's localized "not enough characters" text,
    ready to be shown to the learner.

    Attributes:
        minimum_length: Required number of characters.
        actual_length: Number of characters the answer had.
    """

    def __init__(
        self,
        message: str,
        minimum_length: int,
        actual_length: int,
        details: dict | None = None,
    ):
        """Initialize answer too short error.

        Args:
            message: Learner-facing message.
            minimum_length: Required number of characters.
            actual_length: Number of characters the answer had.
            details: Optional dictionary with additional error context.
        """
        self.minimum_length = minimum_length
        self.actual_length = actual_length
        super().__init__(message, details)
