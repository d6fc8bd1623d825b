"""Prompt templates."""

from cookbook.llm.prompts.base import BasePrompt
from cookbook.llm.prompts.format_recipe import (
    FormatRecipePrompt,
    GeneratedIngredient,
    GeneratedRecipe,
)
from cookbook.llm.prompts.import_recipe import ImportRecipePrompt


__all__ = [
    "BasePrompt",
    "FormatRecipePrompt",
    "GeneratedIngredient",
    "GeneratedRecipe",
    "ImportRecipePrompt",
]
