"""Swipe deck, favorites and logbook selections."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable

    from cookbook.models import Recipe


DEFAULT_DECK_COPIES = 3


def build_deck(
    recipes: Iterable[Recipe],
    copies: int = DEFAULT_DECK_COPIES,
    rng: random.Random | None = None,
) -> list[Recipe]:
    """Shuffle the recipes and repeat the order ``copies`` times.

    Repeating keeps a small collection from running out while swiping.
    """
    rng = rng or random.Random()  # noqa: S311 - not for security
    shuffled = list(recipes)
    rng.shuffle(shuffled)
    return shuffled * max(copies, 1)


def favorite_recipes(recipes: Iterable[Recipe]) -> list[Recipe]:
    return [r for r in recipes if r.is_favorite]


def logbook(recipes: Iterable[Recipe], user_id: str | None) -> list[Recipe]:
    """Recipes the user favorited or created, in list order."""
    return [
        r for r in recipes if r.is_favorite or (user_id is not None and r.creator_id == user_id)
    ]


def can_edit(recipe: Recipe, user_id: str | None) -> bool:
    """Only the owner may open the edit form."""
    return recipe.is_owned_by(user_id)
