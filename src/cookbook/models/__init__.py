"""Domain models shared by services and the API layer."""

from cookbook.models.recipe import (
    SYSTEM_PREFIX,
    Ingredient,
    Owned,
    Ownership,
    Recipe,
    System,
    Unowned,
)
from cookbook.models.user import ActingUser


__all__ = [
    "SYSTEM_PREFIX",
    "ActingUser",
    "Ingredient",
    "Owned",
    "Ownership",
    "Recipe",
    "System",
    "Unowned",
]
