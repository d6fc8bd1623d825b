"""Recipe synchronization: per-identity optimistic state over the data store."""

from cookbook.services.sync.cache import RecipeCache
from cookbook.services.sync.constants import ANONYMOUS_KEY, fallback_recipes
from cookbook.services.sync.local import LocalRecipeBook
from cookbook.services.sync.protocol import RecipeBook
from cookbook.services.sync.registry import RecipeSessionRegistry
from cookbook.services.sync.service import (
    MutationResult,
    RecipeSyncService,
    identity_key,
)


__all__ = [
    "ANONYMOUS_KEY",
    "LocalRecipeBook",
    "MutationResult",
    "RecipeBook",
    "RecipeCache",
    "RecipeSessionRegistry",
    "RecipeSyncService",
    "fallback_recipes",
    "identity_key",
]
