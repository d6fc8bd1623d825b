"""Standalone recipe book persisted to a local JSON file.

Used when no hosted data store is configured. All identities share one
flat list of recipes, written to disk as a single JSON document after
every change. Favorites are a flag on the recipe itself.
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import TYPE_CHECKING

import orjson
from pydantic import TypeAdapter, ValidationError

from cookbook.models import Recipe
from cookbook.observability.logging import get_logger
from cookbook.services.sync.constants import LOCAL_ID_PREFIX, fallback_recipes
from cookbook.services.sync.service import MutationResult


if TYPE_CHECKING:
    from cookbook.models import ActingUser


logger = get_logger(__name__)

_recipe_list = TypeAdapter(list[Recipe])


class LocalRecipeBook:
    """Recipe list stored in one JSON file, seeded with the built-in set."""

    def __init__(self, path: str | Path, *, fallback: list[Recipe] | None = None) -> None:
        self._path = Path(path)
        self._fallback = fallback if fallback is not None else fallback_recipes()
        self._recipes: list[Recipe] = []
        self._loaded = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def recipes(self) -> list[Recipe]:
        return list(self._recipes)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def get(self, recipe_id: str) -> Recipe | None:
        return next((r for r in self._recipes if r.id == recipe_id), None)

    async def load(self, _user: ActingUser | None = None, *, force: bool = False) -> list[Recipe]:
        """Read the book from disk once; seed it when the file does not exist.

        An unreadable or corrupt file yields the built-in set; the file is
        left alone until the next change is written.
        """
        if self._loaded and not force:
            return self.recipes

        if self._path.exists():
            try:
                self._recipes = _recipe_list.validate_json(self._path.read_bytes())
                logger.debug("Recipe book read", path=str(self._path), count=len(self._recipes))
            except (OSError, ValidationError) as e:
                logger.warning(
                    "Recipe book unreadable, using built-in set",
                    path=str(self._path),
                    error=str(e),
                )
                self._recipes = self._seed()
        else:
            seeded = self._seed()
            if self._commit(seeded):
                logger.info("Recipe book seeded", path=str(self._path))
            else:
                self._recipes = seeded

        self._loaded = True
        return self.recipes

    async def add(self, user: ActingUser | None, recipe: Recipe) -> MutationResult:
        stored = recipe.model_copy(
            update={
                "id": f"{LOCAL_ID_PREFIX}{uuid.uuid4().hex}",
                "creator_id": user.id if user else None,
                "author_email": user.email if user else None,
                "is_system_recipe": False,
            }
        )
        if not self._commit([stored, *self._recipes]):
            return MutationResult(committed=False)
        return MutationResult(committed=True, recipe=stored)

    async def update(self, _user: ActingUser | None, recipe: Recipe) -> MutationResult:
        current = self.get(recipe.id)
        if current is None:
            return MutationResult(committed=False)

        updated = recipe.model_copy(
            update={
                "creator_id": current.creator_id,
                "author_email": current.author_email,
                "is_system_recipe": current.is_system_recipe,
            }
        )
        if not self._commit([updated if r.id == recipe.id else r for r in self._recipes]):
            return MutationResult(committed=False, recipe=current)
        return MutationResult(committed=True, recipe=updated)

    async def toggle_favorite(
        self,
        user: ActingUser | None,
        recipe_id: str,
        is_favorite: bool,
    ) -> MutationResult:
        current = self.get(recipe_id)
        if current is None:
            return MutationResult(committed=False)
        return await self.update(user, current.model_copy(update={"is_favorite": is_favorite}))

    async def delete(self, _user: ActingUser | None, recipe_id: str) -> MutationResult:
        current = self.get(recipe_id)
        if current is None:
            return MutationResult(committed=False)
        if not self._commit([r for r in self._recipes if r.id != recipe_id]):
            return MutationResult(committed=False, recipe=current)
        return MutationResult(committed=True)

    def _seed(self) -> list[Recipe]:
        return [r.model_copy() for r in self._fallback]

    def _commit(self, recipes: list[Recipe]) -> bool:
        """Write ``recipes`` to disk and adopt them; keep the old list on failure."""
        try:
            self._save(recipes)
        except OSError as e:
            logger.warning("Writing recipe book failed", path=str(self._path), error=str(e))
            return False
        self._recipes = recipes
        return True

    def _save(self, recipes: list[Recipe]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_bytes(
            orjson.dumps(
                [r.model_dump() for r in recipes],
                option=orjson.OPT_INDENT_2,
            )
        )
        tmp.replace(self._path)
