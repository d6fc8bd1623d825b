"""Unit tests for the view logic over recipe lists."""

from __future__ import annotations

import random

import pytest

from cookbook.core.config.settings import ImageGenerationSettings
from cookbook.llm.prompts import GeneratedRecipe
from cookbook.models import Ingredient, Recipe
from cookbook.services.views import (
    assemble_cookup_recipe,
    build_deck,
    can_edit,
    favorite_recipes,
    illustration_url,
    logbook,
    scale_amount,
    scale_recipe,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def recipes() -> list[Recipe]:
    return [
        Recipe(id="1", title="Labskaus", creator_id="user-1"),
        Recipe(id="2", title="Fischbrötchen", creator_id="user-2", is_favorite=True),
        Recipe(id="system-1", title="Affogato", is_system_recipe=True),
        Recipe(id="3", title="Rote Grütze", creator_id="user-2"),
    ]


class TestDeck:
    """Tests for build_deck."""

    def test_repeats_shuffled_order(self, recipes: list[Recipe]) -> None:
        deck = build_deck(recipes, copies=3, rng=random.Random(7))

        assert len(deck) == 12
        assert deck[:4] == deck[4:8] == deck[8:]
        assert sorted(r.id for r in deck[:4]) == sorted(r.id for r in recipes)

    def test_does_not_mutate_input(self, recipes: list[Recipe]) -> None:
        order = [r.id for r in recipes]

        build_deck(recipes, rng=random.Random(1))

        assert [r.id for r in recipes] == order

    def test_empty(self) -> None:
        assert build_deck([]) == []


class TestSelections:
    """Tests for favorites, logbook and edit permission."""

    def test_favorites(self, recipes: list[Recipe]) -> None:
        assert [r.id for r in favorite_recipes(recipes)] == ["2"]

    def test_logbook_has_favorites_and_own_recipes(self, recipes: list[Recipe]) -> None:
        assert [r.id for r in logbook(recipes, "user-1")] == ["1", "2"]

    def test_anonymous_logbook_has_favorites_only(self, recipes: list[Recipe]) -> None:
        assert [r.id for r in logbook(recipes, None)] == ["2"]

    def test_only_owner_can_edit(self, recipes: list[Recipe]) -> None:
        assert can_edit(recipes[0], "user-1") is True
        assert can_edit(recipes[0], "user-2") is False
        assert can_edit(recipes[0], None) is False
        assert can_edit(recipes[2], "user-1") is False


class TestScaling:
    """Tests for scale_amount and scale_recipe."""

    @pytest.mark.parametrize(
        ("amount", "multiplier", "expected"),
        [
            ("500g", 2, "1000g"),
            ("500g", 1, "500g"),
            ("0,5 l", 3, "1,50 l"),
            ("1.5 EL", 2, "3 EL"),
            ("2-3 Zehen", 2, "4-6 Zehen"),
            ("1/2 TL", 2, "1 TL"),
            ("1/2 TL", 3, "1,50 TL"),
            ("3/4 Tasse", 4, "3 Tasse"),
            ("1 Prise", 4, "1 Prise"),
            ("1 Msp.", 2, "1 Msp."),
            ("etwas Salz", 2, "etwas Salz"),
            ("nach Geschmack", 3, "nach Geschmack"),
            ("", 2, ""),
        ],
    )
    def test_scale_amount(self, amount: str, multiplier: float, expected: str) -> None:
        assert scale_amount(amount, multiplier) == expected

    def test_scale_recipe_to_fewer_portions(self) -> None:
        recipe = Recipe(
            title="Kartoffeln",
            ingredients=[
                Ingredient(amount="500g", item="Kartoffeln"),
                Ingredient(amount="1 Kugel", item="Butter"),
                Ingredient(amount="1 Prise", item="Muskat"),
            ],
        )

        scaled = scale_recipe(recipe, 2)

        assert scaled.portions == 2
        assert [i.amount for i in scaled.ingredients] == ["250g", "0,50 Kugel", "1 Prise"]
        assert recipe.ingredients[0].amount == "500g"

    def test_same_or_missing_portions_is_identity(self) -> None:
        recipe = Recipe(title="Kartoffeln", ingredients=[Ingredient(amount="500g", item="K")])

        assert scale_recipe(recipe, 4) is recipe
        assert scale_recipe(recipe, None) is recipe


class TestIllustration:
    """Tests for illustration_url."""

    def test_default_template(self) -> None:
        assert illustration_url("Affogato") == (
            "https://image.pollinations.ai/prompt/"
            "Affogato%203d%20cartoon%20style%20delicious%20food%20shiny%20vibrant%20colorful"
            "?width=1200&height=800&nologo=true"
        )

    def test_encodes_title(self) -> None:
        url = illustration_url("Kartoffeln & Ei/Spinat")

        assert "Kartoffeln%20%26%20Ei%2FSpinat%203d" in url

    def test_custom_settings(self) -> None:
        settings = ImageGenerationSettings(url="http://img.test/p/", width=10, height=20, style="x")

        assert illustration_url("T", settings) == "http://img.test/p/T%20x?width=10&height=20&nologo=true"


class TestCookup:
    """Tests for assemble_cookup_recipe."""

    def test_generated_fields_win(self) -> None:
        generated = GeneratedRecipe.model_validate(
            {
                "title": "Bratkartoffeln",
                "ingredients": [{"amount": "1 kg", "item": "Kartoffeln"}],
                "steps": ["Braten."],
            }
        )

        recipe = assemble_cookup_recipe(
            title="kartoffeln",
            ingredients=["Kartoffeln"],
            steps=[],
            generated=generated,
        )

        assert recipe.title == "Bratkartoffeln"
        assert recipe.ingredients == [Ingredient(amount="1 kg", item="Kartoffeln")]
        assert recipe.steps == ["Braten."]
        assert recipe.image_url == illustration_url("Bratkartoffeln")

    def test_raw_input_fills_gaps(self) -> None:
        recipe = assemble_cookup_recipe(
            title=None,
            ingredients=["Eier", "Speck"],
            steps=[],
            generated=GeneratedRecipe(),
        )

        assert recipe.title == "Neues Rezept"
        assert recipe.ingredients == [
            Ingredient(amount="1 Portion", item="Eier"),
            Ingredient(amount="1 Portion", item="Speck"),
        ]
        assert recipe.steps == ["Zubereitung fehlt."]

    def test_formatting_failure_uses_raw_input(self) -> None:
        recipe = assemble_cookup_recipe(
            title=None,
            ingredients=["Hering"],
            steps=["Einlegen."],
            generated=None,
        )

        assert recipe.title == "Nautischer Eintopf"
        assert recipe.ingredients == [Ingredient(amount="1 Portion", item="Hering")]
        assert recipe.steps == ["Einlegen."]

    def test_uploaded_image_wins(self) -> None:
        recipe = assemble_cookup_recipe(
            title="Hering",
            ingredients=[],
            steps=[],
            generated=None,
            image_url="data:image/png;base64,AAAA",
        )

        assert recipe.image_url == "data:image/png;base64,AAAA"
