"""Recipe import gateway."""

from cookbook.services.importing.exceptions import (
    InvalidImportURLError,
    RecipeImportError,
    RecipeImportFetchError,
)
from cookbook.services.importing.service import (
    RecipeImportService,
    extract_page_text,
    validate_import_url,
)


__all__ = [
    "InvalidImportURLError",
    "RecipeImportError",
    "RecipeImportFetchError",
    "RecipeImportService",
    "extract_page_text",
    "validate_import_url",
]
