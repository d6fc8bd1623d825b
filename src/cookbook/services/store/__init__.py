"""Remote data store client."""

from cookbook.services.store.client import RestDataStoreClient
from cookbook.services.store.exceptions import (
    DataStoreError,
    DataStoreResponseError,
    DataStoreTimeoutError,
    DataStoreUnavailableError,
)
from cookbook.services.store.protocol import DataStoreProtocol, Row
from cookbook.services.store.schemas import (
    FavoriteRow,
    RecipeRow,
    new_recipe_row,
    recipe_fields,
)


__all__ = [
    "DataStoreError",
    "DataStoreProtocol",
    "DataStoreResponseError",
    "DataStoreTimeoutError",
    "DataStoreUnavailableError",
    "FavoriteRow",
    "RecipeRow",
    "RestDataStoreClient",
    "Row",
    "new_recipe_row",
    "recipe_fields",
]
