"""Recipe synchronization service.

Holds the merged recipe list (recipes + the acting user's favorite flags)
of one identity in memory and applies every mutation optimistically:
the in-memory list changes first, the data store is written afterwards,
and a failed remote step restores the list as it was before the mutation.
Remote failures are logged and reported as ``committed=False``; they are
never raised to the caller.

Overlapping mutations on the same recipe are not coordinated. If their
remote round-trips interleave, the later rollback or write wins.
"""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cookbook.observability.logging import get_logger
from cookbook.services.store import (
    DataStoreError,
    FavoriteRow,
    RecipeRow,
    new_recipe_row,
    recipe_fields,
)
from cookbook.services.sync.cache import RecipeCache
from cookbook.services.sync.constants import (
    ANONYMOUS_KEY,
    LOCAL_ID_PREFIX,
    fallback_recipes,
)


if TYPE_CHECKING:
    from cookbook.models import ActingUser, Recipe
    from cookbook.services.store import DataStoreProtocol


logger = get_logger(__name__)

RemoteOp = Callable[[], Awaitable[None]]


def identity_key(user: ActingUser | None) -> str:
    """Cache/session key of an acting identity."""
    return f"user:{user.id}" if user else ANONYMOUS_KEY


@dataclass(frozen=True, slots=True)
class MutationResult:
    """Outcome of a mutation.

    Attributes:
        committed: False when a remote step failed and the change was rolled back.
        recipe: The recipe as it is in memory afterwards (None if absent).
    """

    committed: bool
    recipe: Recipe | None = None


class RecipeSyncService:
    """In-memory recipe state of one identity, synchronized with the data store."""

    def __init__(
        self,
        store: DataStoreProtocol,
        *,
        recipes_table: str = "recipes",
        favorites_table: str = "favorites",
        fallback: list[Recipe] | None = None,
    ) -> None:
        self._store = store
        self._recipes_table = recipes_table
        self._favorites_table = favorites_table
        self._fallback = fallback if fallback is not None else fallback_recipes()
        self._cache = RecipeCache()
        self._recipes: list[Recipe] = []
        self._identity: str | None = None
        self._loaded = False

    @property
    def recipes(self) -> list[Recipe]:
        return list(self._recipes)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def get(self, recipe_id: str) -> Recipe | None:
        return next((r for r in self._recipes if r.id == recipe_id), None)

    # =========================================================================
    # Load
    # =========================================================================

    async def load(self, user: ActingUser | None, *, force: bool = False) -> list[Recipe]:
        """Load the merged recipe list for ``user``.

        A second load for the same identity is served from the cache unless
        ``force`` is set. An empty or failed fetch yields the built-in set.
        """
        key = identity_key(user)
        if key != self._identity:
            self._identity = key
            self._loaded = False

        cached = None if force else self._cache.get(key)
        if cached is not None:
            self._recipes = cached
            self._loaded = True
            return self.recipes

        try:
            recipes = await self._fetch(user)
        except DataStoreError as e:
            logger.warning("Loading recipes failed, using built-in set", error=str(e))
            recipes = []
        except Exception:
            logger.exception("Unexpected error while loading recipes")
            recipes = []

        if not recipes:
            recipes = [r.model_copy() for r in self._fallback]

        self._recipes = recipes
        self._remember()
        self._loaded = True
        logger.debug("Recipes loaded", identity=key, count=len(recipes))
        return self.recipes

    async def _fetch(self, user: ActingUser | None) -> list[Recipe]:
        rows = await self._store.select(self._recipes_table)
        recipes = [RecipeRow.model_validate(row).to_recipe() for row in rows]
        if user is None or not recipes:
            return recipes

        favorite_rows = await self._store.select(self._favorites_table, user_id=user.id)
        favorite_ids = {FavoriteRow.model_validate(r).recipe_id for r in favorite_rows}
        return [
            r.model_copy(update={"is_favorite": True}) if r.id in favorite_ids else r
            for r in recipes
        ]

    # =========================================================================
    # Mutations
    # =========================================================================

    async def add(self, user: ActingUser | None, recipe: Recipe) -> MutationResult:
        """Prepend ``recipe`` under a temporary id, then insert it remotely.

        On success the temporary id is swapped for the store-issued one; on
        failure the entry is removed again.
        """
        temp_id = f"{LOCAL_ID_PREFIX}{uuid.uuid4().hex}"
        pending = recipe.model_copy(
            update={
                "id": temp_id,
                "creator_id": user.id if user else None,
                "author_email": user.email if user else None,
                "is_system_recipe": False,
            }
        )
        final_id = temp_id

        def apply() -> None:
            self._recipes = [pending, *self._recipes]

        def remove_pending() -> None:
            self._recipes = [r for r in self._recipes if r.id != temp_id]

        async def insert_row() -> None:
            nonlocal final_id
            assert user is not None
            row = await self._store.insert(
                self._recipes_table, new_recipe_row(pending, user)
            )
            final_id = RecipeRow.model_validate(row).id
            latest = self.get(temp_id) or pending
            self._replace(temp_id, latest.model_copy(update={"id": final_id}))

        committed = await self._optimistic(
            "add",
            temp_id,
            apply,
            insert_row if user is not None else None,
            on_failure=remove_pending,
        )
        return MutationResult(committed, self.get(final_id))

    async def update(self, user: ActingUser | None, recipe: Recipe) -> MutationResult:
        """Apply the full field set of ``recipe`` over the entry with its id.

        Ownership fields are kept from the stored entry. With an acting
        identity, favoriting a system recipe forks an owned copy, a changed
        favorite flag writes or removes the favorite row, and an owner's
        edit is persisted.
        """
        current = self.get(recipe.id)
        if current is None:
            logger.warning("Update for unknown recipe ignored", recipe_id=recipe.id)
            return MutationResult(committed=False)

        updated = recipe.model_copy(
            update={
                "creator_id": current.creator_id,
                "author_email": current.author_email,
                "is_system_recipe": current.is_system_recipe,
            }
        )
        final_id = current.id

        def apply() -> None:
            self._replace(current.id, updated)

        async def write_rows() -> None:
            nonlocal final_id
            assert user is not None
            cloned = False
            if current.is_system and updated.is_favorite and not current.is_favorite:
                final_id = await self._clone_for(user, updated)
                cloned = True

            favorite_written = False
            try:
                if updated.is_favorite != current.is_favorite:
                    await self._write_favorite(user, final_id, favorite=updated.is_favorite)
                    favorite_written = True

                # A fresh clone already carries the edited fields
                if not cloned and current.is_owned_by(user.id):
                    await self._store.update(
                        self._recipes_table,
                        recipe_fields(updated),
                        id=current.id,
                        user_id=user.id,
                    )
            except Exception:
                # Undo the remote steps that did go through
                if favorite_written:
                    await self._revert_favorite(user, final_id, favorite=current.is_favorite)
                if cloned:
                    await self._discard_clone(user, final_id)
                raise

        committed = await self._optimistic(
            "update",
            current.id,
            apply,
            write_rows if user is not None else None,
        )
        return MutationResult(committed, self.get(final_id) or self.get(current.id))

    async def toggle_favorite(
        self,
        user: ActingUser | None,
        recipe_id: str,
        is_favorite: bool,
    ) -> MutationResult:
        current = self.get(recipe_id)
        if current is None:
            logger.warning("Favorite toggle for unknown recipe ignored", recipe_id=recipe_id)
            return MutationResult(committed=False)
        return await self.update(
            user, current.model_copy(update={"is_favorite": is_favorite})
        )

    async def delete(self, user: ActingUser | None, recipe_id: str) -> MutationResult:
        """Remove the entry, then delete the owned row remotely.

        System recipes and anonymous sessions never reach the data store.
        """
        current = self.get(recipe_id)
        if current is None:
            return MutationResult(committed=False)

        def apply() -> None:
            self._recipes = [r for r in self._recipes if r.id != recipe_id]

        async def delete_row() -> None:
            assert user is not None
            await self._store.delete(self._recipes_table, id=recipe_id, user_id=user.id)

        remote = delete_row if user is not None and not current.is_system else None
        committed = await self._optimistic("delete", recipe_id, apply, remote)
        return MutationResult(committed, None if committed else self.get(recipe_id))

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _optimistic(
        self,
        operation: str,
        recipe_id: str,
        apply: Callable[[], None],
        remote_op: RemoteOp | None,
        on_failure: Callable[[], None] | None = None,
    ) -> bool:
        """Apply locally, run the remote step, restore on failure.

        Without ``on_failure`` the pre-mutation snapshot is restored.
        """
        snapshot = list(self._recipes)

        def restore() -> None:
            self._recipes = snapshot

        apply()
        try:
            if remote_op is not None:
                await remote_op()
        except DataStoreError as e:
            logger.warning(
                "Remote write failed, rolling back",
                operation=operation,
                recipe_id=recipe_id,
                error=str(e),
            )
            (on_failure or restore)()
            return False
        except Exception:
            logger.exception(
                "Unexpected error during remote write, rolling back",
                operation=operation,
                recipe_id=recipe_id,
            )
            (on_failure or restore)()
            return False
        finally:
            self._remember()

        return True

    async def _clone_for(self, user: ActingUser, recipe: Recipe) -> str:
        """Insert an owned copy of a system recipe and point the entry at it."""
        row = await self._store.insert(self._recipes_table, new_recipe_row(recipe, user))
        stored = RecipeRow.model_validate(row)
        clone = recipe.model_copy(
            update={
                "id": stored.id,
                "creator_id": user.id,
                "author_email": user.email,
                "is_system_recipe": False,
            }
        )
        self._replace(recipe.id, clone)
        logger.info(
            "System recipe cloned on favorite",
            source_id=recipe.id,
            clone_id=stored.id,
        )
        return stored.id

    async def _discard_clone(self, user: ActingUser, clone_id: str) -> None:
        """Delete a clone whose favorite row could not be written."""
        try:
            await self._store.delete(self._recipes_table, id=clone_id, user_id=user.id)
        except DataStoreError as e:
            logger.warning("Orphaned clone left in store", clone_id=clone_id, error=str(e))
        else:
            logger.info("Clone discarded after failed favorite", clone_id=clone_id)

    async def _revert_favorite(self, user: ActingUser, recipe_id: str, *, favorite: bool) -> None:
        try:
            await self._write_favorite(user, recipe_id, favorite=favorite)
        except DataStoreError as e:
            logger.warning(
                "Favorite row could not be reverted",
                recipe_id=recipe_id,
                error=str(e),
            )

    async def _write_favorite(self, user: ActingUser, recipe_id: str, *, favorite: bool) -> None:
        if favorite:
            await self._store.insert(
                self._favorites_table, {"user_id": user.id, "recipe_id": recipe_id}
            )
        else:
            await self._store.delete(
                self._favorites_table, user_id=user.id, recipe_id=recipe_id
            )

    def _replace(self, recipe_id: str, recipe: Recipe) -> None:
        self._recipes = [recipe if r.id == recipe_id else r for r in self._recipes]

    def _remember(self) -> None:
        if self._identity is not None:
            self._cache.store(self._identity, self._recipes)
