"""Portion scaling of ingredient amounts."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from cookbook.models import Recipe


# "1/2" is one number, not two
_NUMBER = re.compile(r"(\d+)\s*/\s*(\d+)|(\d+(?:[.,]\d+)?)")

# Amounts that describe a pinch or a taste, not a quantity
NON_SCALABLE_UNITS = (
    "prise",
    "prisen",
    "msp",
    "messerspitze",
    "etwas",
    "nach geschmack",
    "nach belieben",
    "schuss",
    "spritzer",
)


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}".replace(".", ",")


def _is_non_scalable(amount: str) -> bool:
    lowered = amount.lower()
    return any(
        re.search(rf"(?<![a-zäöüß]){re.escape(unit)}(?![a-zäöüß])", lowered)
        for unit in NON_SCALABLE_UNITS
    )


def scale_amount(amount: str, multiplier: float) -> str:
    """Multiply every number in ``amount``.

    ``"500g"`` scaled by 2 is ``"1000g"``; ``"0,5 l"`` by 3 is ``"1,50 l"``;
    a fraction counts as one number, so ``"1/2 TL"`` by 2 is ``"1 TL"``.
    Amounts without digits or in a non-scalable unit are returned as-is.
    """
    if multiplier == 1 or _is_non_scalable(amount):
        return amount

    def scale(match: re.Match[str]) -> str:
        numerator, denominator, decimal = match.groups()
        if decimal is not None:
            number = float(decimal.replace(",", "."))
        elif int(denominator) == 0:
            return match.group(0)
        else:
            number = int(numerator) / int(denominator)
        return _format_number(number * multiplier)

    return _NUMBER.sub(scale, amount)


def scale_recipe(recipe: Recipe, portions: int | None) -> Recipe:
    """Copy of ``recipe`` with ingredient amounts scaled to ``portions``."""
    if not portions or portions == recipe.portions or recipe.portions <= 0:
        return recipe

    multiplier = portions / recipe.portions
    ingredients = [
        i.model_copy(update={"amount": scale_amount(i.amount, multiplier)})
        for i in recipe.ingredients
    ]
    return recipe.model_copy(update={"ingredients": ingredients, "portions": portions})
