"""Prompt extracting a recipe from noisy web page text."""

from __future__ import annotations

from typing import Any, ClassVar

from .base import BasePrompt
from .format_recipe import RECIPE_JSON_SHAPE, GeneratedRecipe


class ImportRecipePrompt(BasePrompt[GeneratedRecipe]):
    """Extract title, ingredients and steps from a recipe web page."""

    output_schema = GeneratedRecipe
    system_prompt: ClassVar[str] = (
        "Du bist ein hilfreicher Assistent für eine Rezept-App.\n"
        "Du erhältst einen unstrukturierten Rohtext von einer Koch-Website. "
        "Deine Aufgabe ist es, daraus das Rezept zu extrahieren.\n"
        "Finde den Titel, die Zutaten (inklusive Mengen) und die Zubereitungsschritte.\n"
        "Ignoriere Werbung, Kommentare oder unwichtige Texte der Website.\n"
        "Formatiere das Ergebnis in ein vollständiges, strukturiertes Rezept.\n"
        "Erwähne niemals, dass du eine KI bist.\n"
        "Antworte AUSSCHLIESSLICH mit einem validen JSON-Objekt im folgenden Format, "
        "ohne Markdown-Formatierung:\n"
        + RECIPE_JSON_SHAPE % "Gefundener Rezepttitel"
    )

    def format(self, *, page_text: str, **_: Any) -> str:
        if not page_text:
            msg = "page_text is required"
            raise ValueError(msg)
        return f"Extrahiere das Rezept aus diesem Website-Text:\n\n{page_text}"
