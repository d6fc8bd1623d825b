"""Process-wide registry of per-identity synchronization sessions."""

from __future__ import annotations

from collections import OrderedDict
from typing import TYPE_CHECKING

from cookbook.observability.logging import get_logger
from cookbook.services.sync.service import RecipeSyncService, identity_key


if TYPE_CHECKING:
    from cookbook.models import ActingUser, Recipe
    from cookbook.services.store import DataStoreProtocol


logger = get_logger(__name__)


class RecipeSessionRegistry:
    """Bounded LRU map from identity key to its ``RecipeSyncService``.

    Requests of the same identity share one service, and with it the
    cached recipe list. The least recently used session is dropped once
    ``max_sessions`` is exceeded; it is rebuilt from the store on the
    next request.
    """

    def __init__(
        self,
        store: DataStoreProtocol,
        *,
        max_sessions: int = 500,
        recipes_table: str = "recipes",
        favorites_table: str = "favorites",
        fallback: list[Recipe] | None = None,
    ) -> None:
        self._store = store
        self._max_sessions = max_sessions
        self._recipes_table = recipes_table
        self._favorites_table = favorites_table
        self._fallback = fallback
        self._sessions: OrderedDict[str, RecipeSyncService] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, user: ActingUser | None) -> RecipeSyncService:
        """Return the session of ``user``, creating it if needed."""
        key = identity_key(user)
        service = self._sessions.get(key)
        if service is not None:
            self._sessions.move_to_end(key)
            return service

        service = RecipeSyncService(
            self._store,
            recipes_table=self._recipes_table,
            favorites_table=self._favorites_table,
            fallback=self._fallback,
        )
        self._sessions[key] = service
        if len(self._sessions) > self._max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.debug("Recipe session evicted", identity=evicted)
        return service

    def clear(self) -> None:
        self._sessions.clear()
