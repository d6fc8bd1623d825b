"""Recipe formatting gateway.

Sends raw recipe fragments to the text-generation endpoint and returns
the structured recipe it writes back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cookbook.llm.exceptions import LLMError
from cookbook.llm.prompts import FormatRecipePrompt, GeneratedRecipe
from cookbook.observability.logging import get_logger
from cookbook.services.formatting.exceptions import RecipeFormattingError


if TYPE_CHECKING:
    from cookbook.llm.client.protocol import LLMClientProtocol


logger = get_logger(__name__)


class RecipeFormattingService:
    """Formats title, ingredient and step fragments into a full recipe."""

    def __init__(self, llm_client: LLMClientProtocol) -> None:
        self._llm_client = llm_client
        self._prompt = FormatRecipePrompt()

    async def format(
        self,
        title: str | None,
        ingredients: list[str],
        steps: list[str],
    ) -> GeneratedRecipe:
        """Format raw fragments.

        Raises:
            RecipeFormattingError: If generation or parsing fails.
        """
        prompt = self._prompt.format(title=title, ingredients=ingredients, steps=steps)
        try:
            recipe = await self._llm_client.generate_structured(
                prompt,
                GeneratedRecipe,
                system=self._prompt.system_prompt,
            )
        except LLMError as e:
            logger.warning("Recipe formatting failed", error=str(e))
            raise RecipeFormattingError(str(e)) from e

        logger.info(
            "Recipe formatted",
            title=recipe.title,
            ingredient_count=len(recipe.ingredients or []),
            step_count=len(recipe.steps or []),
        )
        return recipe
