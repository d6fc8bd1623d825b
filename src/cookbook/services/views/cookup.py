"""Assembly of the recipe created by "cook up"."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cookbook.models import Ingredient, Recipe
from cookbook.services.views.illustration import illustration_url


if TYPE_CHECKING:
    from cookbook.core.config.settings import ImageGenerationSettings
    from cookbook.llm.prompts import GeneratedRecipe


RAW_AMOUNT = "1 Portion"
TITLE_ON_SUCCESS = "Neues Rezept"
TITLE_ON_FAILURE = "Nautischer Eintopf"
MISSING_STEPS = ["Zubereitung fehlt."]


def assemble_cookup_recipe(
    *,
    title: str | None,
    ingredients: list[str],
    steps: list[str],
    generated: GeneratedRecipe | None,
    image_url: str | None = None,
    image_settings: ImageGenerationSettings | None = None,
) -> Recipe:
    """Build the recipe to persist from raw input and the formatter's answer.

    ``generated`` is None when formatting failed; the raw input is then
    used as-is. An uploaded image wins over the generated illustration.
    """
    raw_ingredients = [Ingredient(amount=RAW_AMOUNT, item=item) for item in ingredients]

    if generated is None:
        final_title = title or TITLE_ON_FAILURE
        final_ingredients = raw_ingredients
        final_steps = steps or list(MISSING_STEPS)
    else:
        final_title = generated.title or title or TITLE_ON_SUCCESS
        final_ingredients = (
            [Ingredient(amount=i.amount, item=i.item) for i in generated.ingredients]
            if generated.ingredients
            else raw_ingredients
        )
        final_steps = generated.steps or steps or list(MISSING_STEPS)

    return Recipe(
        title=final_title,
        ingredients=final_ingredients,
        steps=final_steps,
        image_url=image_url or illustration_url(final_title, image_settings),
    )
