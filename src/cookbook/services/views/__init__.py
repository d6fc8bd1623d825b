"""View logic over a recipe list (no I/O)."""

from cookbook.services.views.cookup import assemble_cookup_recipe
from cookbook.services.views.deck import (
    build_deck,
    can_edit,
    favorite_recipes,
    logbook,
)
from cookbook.services.views.illustration import illustration_url
from cookbook.services.views.scaling import scale_amount, scale_recipe


__all__ = [
    "assemble_cookup_recipe",
    "build_deck",
    "can_edit",
    "favorite_recipes",
    "illustration_url",
    "logbook",
    "scale_amount",
    "scale_recipe",
]
