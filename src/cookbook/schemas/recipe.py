"""Recipe API schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import Field

from cookbook.models import Ingredient, Owned, Recipe, System
from cookbook.models.recipe import DEFAULT_PORTIONS
from cookbook.schemas.base import APIRequest, APIResponse


if TYPE_CHECKING:
    from cookbook.services.sync import MutationResult


class IngredientSchema(APIRequest):
    """One ingredient line."""

    amount: str = Field(default="", max_length=100, description="Amount, e.g. '500g'")
    item: str = Field(..., min_length=1, max_length=200, description="Ingredient")


class RecipeFields(APIRequest):
    """Editable recipe fields."""

    title: str = Field(..., min_length=1, max_length=200)
    ingredients: list[IngredientSchema] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    image_url: str = Field(default="", description="Image URL or data URI")
    portions: int = Field(default=DEFAULT_PORTIONS, ge=1, le=100)
    is_vegetarian: bool = False
    is_vegan: bool = False

    def to_recipe(self, recipe_id: str = "", *, is_favorite: bool = False) -> Recipe:
        return Recipe(
            id=recipe_id,
            title=self.title,
            ingredients=[Ingredient(amount=i.amount, item=i.item) for i in self.ingredients],
            steps=self.steps,
            image_url=self.image_url,
            portions=self.portions,
            is_favorite=is_favorite,
            is_vegetarian=self.is_vegetarian,
            is_vegan=self.is_vegan,
        )


class RecipeCreateRequest(RecipeFields):
    """Body of ``POST /recipes``."""


class RecipeUpdateRequest(RecipeFields):
    """Body of ``PUT /recipes/{id}``: the full field set, favorite flag included."""

    is_favorite: bool = False


class FavoriteRequest(APIRequest):
    """Body of ``PUT /recipes/{id}/favorite``."""

    is_favorite: bool


class CookupRequest(APIRequest):
    """Body of ``POST /recipes/cookup``: raw fragments to format and save."""

    title: str | None = Field(default=None, max_length=200)
    ingredients: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    image_url: str | None = Field(default=None, description="Uploaded image (URL or data URI)")


class FormatRecipeRequest(APIRequest):
    """Body of ``POST /format-recipe``."""

    title: str | None = None
    ingredients: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)


class RecipeResponse(APIResponse):
    """A recipe as returned by the API."""

    id: str
    title: str
    ingredients: list[Ingredient]
    steps: list[str]
    image_url: str
    portions: int
    creator_id: str | None = None
    author_email: str | None = None
    is_system_recipe: bool = False
    is_favorite: bool = False
    is_vegetarian: bool = False
    is_vegan: bool = False
    ownership: Literal["system", "owned", "unowned"] = "unowned"

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> RecipeResponse:
        match recipe.ownership:
            case System():
                ownership = "system"
            case Owned():
                ownership = "owned"
            case _:
                ownership = "unowned"
        return cls(
            **recipe.model_dump(exclude={"is_system_recipe"}),
            is_system_recipe=recipe.is_system,
            ownership=ownership,
        )


class RecipeDetailResponse(RecipeResponse):
    """A recipe scaled to the requested portions."""

    base_portions: int = Field(..., description="Portions the stored amounts are for")
    can_edit: bool = Field(..., description="Whether the acting user owns the recipe")


class RecipeListResponse(APIResponse):
    """Merged recipe list of the acting identity."""

    recipes: list[RecipeResponse]
    is_loaded: bool


class MutationResponse(APIResponse):
    """Outcome of a mutation; ``committed`` is False after a rollback."""

    committed: bool
    recipe: RecipeResponse | None = None

    @classmethod
    def from_result(cls, result: MutationResult) -> MutationResponse:
        return cls(
            committed=result.committed,
            recipe=RecipeResponse.from_recipe(result.recipe) if result.recipe else None,
        )
