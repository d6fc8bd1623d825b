"""Prompt turning raw recipe fragments into a complete recipe."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import BasePrompt


class GeneratedIngredient(BaseModel):
    """One ingredient line as generated."""

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    amount: str = ""
    item: str


class GeneratedRecipe(BaseModel):
    """Structured recipe returned by the formatting and import prompts.

    Every field is optional; callers fill gaps from the raw input.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    ingredients: list[GeneratedIngredient] | None = None
    steps: list[str] | None = Field(default=None)

    @field_validator("ingredients", mode="before")
    @classmethod
    def _plain_ingredients(cls, value: Any) -> Any:
        # Some answers list ingredients as bare strings
        if isinstance(value, list):
            return [{"item": v} if isinstance(v, str) else v for v in value]
        return value


RECIPE_JSON_SHAPE = """{
  "title": "%s",
  "ingredients": [{"amount": "Menge", "item": "Zutat"}],
  "steps": ["Schritt 1", "Schritt 2"]
}"""


class FormatRecipePrompt(BasePrompt[GeneratedRecipe]):
    """Format title, ingredient and step fragments into a full recipe."""

    output_schema = GeneratedRecipe
    system_prompt: ClassVar[str] = (
        "Du bist ein hilfreicher Assistent im Hintergrund einer Rezept-App.\n"
        "Du erhältst Rohdaten für ein Rezept (Titel, Zutaten, evt. grobe Schritte). "
        "Formatiere diese in ein vollständiges, strukturiertes Rezept.\n"
        "Ergänze fehlende Standard-Schritte oder logische Mengenangaben sinnvoll.\n"
        "Erwähne niemals, dass du eine KI bist oder dass du den Text formatiert hast.\n"
        "Antworte AUSSCHLIESSLICH mit einem validen JSON-Objekt im folgenden Format, "
        "ohne Markdown-Formatierung oder Erklärungen drumherum:\n"
        + RECIPE_JSON_SHAPE % "Formatierter Titel"
    )

    def format(
        self,
        *,
        title: str | None = None,
        ingredients: list[str] | None = None,
        steps: list[str] | None = None,
        **_: Any,
    ) -> str:
        return (
            f"Titel: {title or 'Nicht angegeben'}\n"
            f"Zutaten: {', '.join(ingredients or [])}\n"
            f"Grobe Schritte: {', '.join(steps or [])}"
        )
