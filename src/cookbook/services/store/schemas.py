"""Row schemas for the ``recipes`` and ``favorites`` tables."""

from __future__ import annotations

from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, field_validator

from cookbook.models import ActingUser, Ingredient, Recipe
from cookbook.models.recipe import DEFAULT_PORTIONS


class RecipeRow(BaseModel):
    """A row of the ``recipes`` table."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str | None = None
    title: str = ""
    ingredients: list[Ingredient] = []
    steps: list[str] = []
    image_url: str | None = None
    portions: int | None = None
    author_email: str | None = None
    is_system_recipe: bool | None = False
    is_vegetarian: bool | None = False
    is_vegan: bool | None = False

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("ingredients", "steps", mode="before")
    @classmethod
    def _decode_json_column(cls, value: Any) -> Any:
        # Older rows hold the arrays as JSON-encoded text
        if isinstance(value, str):
            return orjson.loads(value) if value.strip() else []
        return value if value is not None else []

    def to_recipe(self) -> Recipe:
        """Map the row onto the in-memory recipe shape."""
        return Recipe(
            id=self.id,
            title=self.title,
            ingredients=self.ingredients,
            steps=self.steps,
            image_url=self.image_url or "",
            portions=self.portions or DEFAULT_PORTIONS,
            creator_id=self.user_id,
            author_email=self.author_email,
            is_system_recipe=bool(self.is_system_recipe),
            is_vegetarian=bool(self.is_vegetarian),
            is_vegan=bool(self.is_vegan),
        )


class FavoriteRow(BaseModel):
    """A row of the ``favorites`` table."""

    model_config = ConfigDict(extra="ignore")

    user_id: str
    recipe_id: str

    @field_validator("recipe_id", mode="before")
    @classmethod
    def _coerce_recipe_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


def recipe_fields(recipe: Recipe) -> dict[str, Any]:
    """Editable columns of a recipe (what an owner's edit persists)."""
    return {
        "title": recipe.title,
        "ingredients": [i.model_dump() for i in recipe.ingredients],
        "steps": list(recipe.steps),
        "image_url": recipe.image_url,
        "portions": recipe.portions,
        "is_vegetarian": recipe.is_vegetarian,
        "is_vegan": recipe.is_vegan,
    }


def new_recipe_row(recipe: Recipe, user: ActingUser) -> dict[str, Any]:
    """Insert payload for a recipe owned by ``user``; the store issues the id."""
    return {
        **recipe_fields(recipe),
        "user_id": user.id,
        "author_email": user.email,
        "is_system_recipe": False,
    }
