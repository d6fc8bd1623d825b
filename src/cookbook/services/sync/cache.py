"""Last-loaded recipe set of one synchronization session."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from cookbook.models import Recipe


class RecipeCache:
    """Holds one recipe list under one identity key.

    A lookup with a different key misses; storing under a new key
    replaces the entry.
    """

    def __init__(self) -> None:
        self._key: str | None = None
        self._recipes: list[Recipe] | None = None

    @property
    def key(self) -> str | None:
        return self._key

    def get(self, key: str) -> list[Recipe] | None:
        if self._recipes is None or key != self._key:
            return None
        return list(self._recipes)

    def store(self, key: str, recipes: list[Recipe]) -> None:
        self._key = key
        self._recipes = list(recipes)

    def invalidate(self) -> None:
        self._key = None
        self._recipes = None
