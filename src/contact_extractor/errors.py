"""Custom exceptions for the contact extractor."""

from __future__ import annotations

import math


class ExtractorError(Exception):
    """Base exception for this project."""


class ConfigError(ExtractorError):
    """Raised when runtime configuration is invalid."""


class FetchError(ExtractorError):
    """Raised when a page cannot be fetched.

    ``status`` carries the HTTP status for non-success responses and ``cause``
    the underlying transport exception for network-level failures.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.cause = cause


class RateLimited(ExtractorError):
    """Raised when an extraction is attempted inside the throttle window."""

    def __init__(self, remaining: float) -> None:
        self.remaining = remaining
        self.retry_after_seconds = max(1, math.ceil(remaining))
        super().__init__(
            f"Please wait {self.retry_after_seconds} seconds before scraping again."
        )

    @property
    def retry_after_ms(self) -> int:
        return max(1, math.ceil(self.remaining * 1000))
