"""Exception types raised by naive-sentiment."""

from __future__ import annotations


class SentimentError(Exception):
    """Base class for all naive-sentiment errors."""


class SourceUnavailableError(SentimentError, FileNotFoundError):
    """A word list (or the directory holding it) could not be found."""

    def __init__(self, list_type: str, location: str = "") -> None:
        self.list_type = list_type
        self.location = location
        message = f"Word list '{list_type}' is not available"
        if location:
            message += f": {location}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class InvalidTrainingInputError(SentimentError, ValueError):
    """Training data is not a flat list of strings."""


class DegenerateScoreError(SentimentError, ZeroDivisionError):
    """All class scores are zero, so probabilities cannot be normalized."""
