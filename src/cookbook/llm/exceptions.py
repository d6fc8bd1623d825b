"""Text-generation client exceptions.

The gateway services catch these and turn them into their own
formatting/import failures.
"""

from __future__ import annotations


class LLMError(Exception):
    """Base exception for text-generation client errors."""


class LLMUnavailableError(LLMError):
    """Raised when the text-generation endpoint cannot be reached."""


class LLMTimeoutError(LLMUnavailableError):
    """Raised when a text-generation request times out."""


class LLMResponseError(LLMError):
    """Raised when the endpoint answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class LLMRateLimitError(LLMResponseError):
    """Raised when the endpoint rate limits the request (HTTP 429)."""


class LLMValidationError(LLMError):
    """Raised when the generated text is not the expected JSON object."""
