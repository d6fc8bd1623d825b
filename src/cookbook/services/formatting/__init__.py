"""Recipe formatting gateway."""

from cookbook.services.formatting.exceptions import RecipeFormattingError
from cookbook.services.formatting.service import RecipeFormattingService


__all__ = ["RecipeFormattingError", "RecipeFormattingService"]
