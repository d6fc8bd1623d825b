"""Interface shared by the remote-backed session and the local book."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from cookbook.models import ActingUser, Recipe
    from cookbook.services.sync.service import MutationResult


@runtime_checkable
class RecipeBook(Protocol):
    """Recipe state the API layer reads and mutates."""

    @property
    def recipes(self) -> list[Recipe]: ...

    @property
    def is_loaded(self) -> bool: ...

    def get(self, recipe_id: str) -> Recipe | None: ...

    async def load(self, user: ActingUser | None, *, force: bool = False) -> list[Recipe]: ...

    async def add(self, user: ActingUser | None, recipe: Recipe) -> MutationResult: ...

    async def update(self, user: ActingUser | None, recipe: Recipe) -> MutationResult: ...

    async def toggle_favorite(
        self,
        user: ActingUser | None,
        recipe_id: str,
        is_favorite: bool,
    ) -> MutationResult: ...

    async def delete(self, user: ActingUser | None, recipe_id: str) -> MutationResult: ...
