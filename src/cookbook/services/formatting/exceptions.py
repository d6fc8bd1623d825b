"""Recipe formatting exceptions."""

from __future__ import annotations

from typing import ClassVar


class RecipeFormattingError(Exception):
    """Raised when the recipe could not be formatted.

    Covers unreachable endpoint, non-2xx answers and unparseable output.
    """

    user_message: ClassVar[str] = "Fehler beim Formatieren des Rezepts."
