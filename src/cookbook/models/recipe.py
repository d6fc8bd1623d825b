"""Recipe domain model.

A recipe's ownership is stored as flat fields (``creator_id``,
``is_system_recipe``) because that is how the data store rows look, and
is read back as one of three variants through ``Recipe.ownership``:

- ``System``: built-in seed shared by everybody, never written remotely
- ``Owned(owner_id)``: a row belonging to one user
- ``Unowned``: created by an anonymous session, lives only in memory
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from pydantic import BaseModel, ConfigDict, Field


SYSTEM_PREFIX: Final[str] = "system-"
DEFAULT_PORTIONS: Final[int] = 4


class Ingredient(BaseModel):
    """One ``{amount, item}`` line of a recipe."""

    model_config = ConfigDict(frozen=True)

    amount: str = ""
    item: str


@dataclass(frozen=True, slots=True)
class System:
    """Built-in recipe."""


@dataclass(frozen=True, slots=True)
class Owned:
    """Recipe row owned by ``owner_id``."""

    owner_id: str


@dataclass(frozen=True, slots=True)
class Unowned:
    """Recipe without an owner (anonymous session)."""


Ownership = System | Owned | Unowned


class Recipe(BaseModel):
    """A recipe as held in memory by a synchronization session."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    title: str
    ingredients: list[Ingredient] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    image_url: str = ""
    portions: int = DEFAULT_PORTIONS
    creator_id: str | None = None
    author_email: str | None = None
    is_system_recipe: bool = False
    is_favorite: bool = False
    is_vegetarian: bool = False
    is_vegan: bool = False

    @property
    def is_system(self) -> bool:
        """True for built-in recipes (flag set or sentinel id prefix)."""
        return self.is_system_recipe or self.id.startswith(SYSTEM_PREFIX)

    @property
    def ownership(self) -> Ownership:
        if self.is_system:
            return System()
        if self.creator_id:
            return Owned(self.creator_id)
        return Unowned()

    def is_owned_by(self, user_id: str | None) -> bool:
        """True when ``user_id`` is the recipe's owner."""
        return user_id is not None and self.ownership == Owned(user_id)
