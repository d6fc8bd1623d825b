"""Data store client exceptions.

The synchronization service catches these and rolls back; they never
reach an HTTP response directly.
"""

from __future__ import annotations


class DataStoreError(Exception):
    """Base exception for data store client errors."""


class DataStoreUnavailableError(DataStoreError):
    """Raised when the data store cannot be reached."""


class DataStoreTimeoutError(DataStoreUnavailableError):
    """Raised when a request to the data store times out."""


class DataStoreResponseError(DataStoreError):
    """Raised when the data store answers with an HTTP error.

    Covers permission (401/403), constraint (409) and server errors.
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)
