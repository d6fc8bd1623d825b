"""Built-in recipes served when the data store is empty or unreachable."""

from __future__ import annotations

from typing import Final

from cookbook.core.config.settings import ImageGenerationSettings
from cookbook.models import Ingredient, Recipe
from cookbook.services.views.illustration import illustration_url


ANONYMOUS_KEY: Final[str] = "anonymous"
LOCAL_ID_PREFIX: Final[str] = "local-"


def fallback_recipes(
    image_settings: ImageGenerationSettings | None = None,
) -> list[Recipe]:
    """Return a fresh copy of the built-in recipe set."""
    return [
        Recipe(
            id="system-1",
            title="Affogato",
            image_url=illustration_url("Affogato", image_settings),
            ingredients=[
                Ingredient(amount="1 Kugel", item="Vanilleeis"),
                Ingredient(amount="1 Shot", item="Heißer Espresso"),
            ],
            steps=[
                "Vanilleeis in ein Glas geben.",
                "Heißen Espresso darüber gießen.",
                "Sofort genießen.",
            ],
            is_system_recipe=True,
            is_vegetarian=True,
        ),
        Recipe(
            id="system-2",
            title="Kartoffeln mit Spinat und Spiegelei",
            image_url=illustration_url(
                "Kartoffeln mit Spinat und Spiegelei", image_settings
            ),
            ingredients=[
                Ingredient(amount="500g", item="Kartoffeln"),
                Ingredient(amount="300g", item="Blattspinat"),
                Ingredient(amount="2", item="Eier"),
                Ingredient(amount="1 Prise", item="Muskatnuss"),
            ],
            steps=[
                "Kartoffeln schälen und in Salzwasser kochen, bis sie weich sind.",
                "Spinat in einer Pfanne andünsten und mit Salz, Pfeffer und "
                "einer Prise Muskatnuss abschmecken.",
                "In der Zwischenzeit die Spiegeleier in einer separaten Pfanne "
                "braten.",
                "Kartoffeln, Spinat und Spiegeleier zusammen auf einem Teller "
                "anrichten und servieren.",
            ],
            is_system_recipe=True,
            is_vegetarian=True,
        ),
    ]
