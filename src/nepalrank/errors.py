"""Exceptions raised by the ranking pipeline."""

from __future__ import annotations

from pathlib import Path


class NepalRankError(RuntimeError):
    """Base class for fatal pipeline failures."""


class ConfigError(NepalRankError):
    """Raised when a run cannot start because its configuration is invalid."""


class SearchResponseError(NepalRankError):
    """Raised when the search API answers with errors or an unexpected payload."""


class FetchError(NepalRankError):
    """Raised when a page request keeps failing after every retry."""

    def __init__(self, message: str, *, attempts: int, cause: BaseException | None = None):
        super().__init__(message)
        self.attempts = attempts
        self.cause = cause


class WriteError(NepalRankError):
    """Raised when an artifact directory or file cannot be written."""

    def __init__(self, message: str, *, path: Path):
        super().__init__(message)
        self.path = path


__all__ = [
    "NepalRankError",
    "ConfigError",
    "SearchResponseError",
    "FetchError",
    "WriteError",
]
