"""Custom exception hierarchy for pagewindow."""

from __future__ import annotations


class PagingError(Exception):
    """Base class for all custom errors raised by pagewindow."""


# --- Configuration errors ---

class ConfigError(PagingError):
    """Base class for configuration problems."""


class ConfigLoadError(ConfigError):
    """Raised when a configuration file cannot be read or parsed."""


class ConfigValidationError(ConfigError):
    """Raised when configuration values fail schema validation."""


# --- Fetch errors ---

class FetchFailure(PagingError):
    """Wraps whatever the injected page fetcher raised for *page*.

    The controller never raises this to callers; it is recorded on
    :attr:`PagingController.failure` alongside the raw cause.
    """

    def __init__(self, page: int, cause: BaseException) -> None:
        super().__init__(f"Failed to fetch page {page}: {cause}")
        self.page = page
        self.cause = cause


__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "FetchFailure",
    "PagingError",
]
