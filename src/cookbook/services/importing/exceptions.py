"""Recipe import exceptions.

Each carries the German message shown to the user.
"""

from __future__ import annotations

from typing import ClassVar


class RecipeImportError(Exception):
    """Raised when no recipe could be extracted from the page."""

    status_code: ClassVar[int] = 500
    user_message: ClassVar[str] = "Fehler beim Extrahieren des Rezepts."


class InvalidImportURLError(RecipeImportError):
    """Raised when the URL is missing, not a string or not http(s)."""

    status_code: ClassVar[int] = 400
    user_message: ClassVar[str] = "Gültige URL erforderlich."


class RecipeImportFetchError(RecipeImportError):
    """Raised when the page could not be loaded (transport error or non-2xx)."""

    user_message: ClassVar[str] = "Website konnte nicht geladen werden."
