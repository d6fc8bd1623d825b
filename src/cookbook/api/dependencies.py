"""FastAPI dependencies for service access.

Services are initialized during application startup and stored in
``app.state``; a missing one is reported as 503.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from cookbook.auth import ActingUserDep
from cookbook.core.config import Settings, get_settings
from cookbook.core.exceptions import ServiceUnavailableException
from cookbook.services.formatting import RecipeFormattingService
from cookbook.services.importing import RecipeImportService
from cookbook.services.sync import RecipeBook


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings or get_settings()


async def get_formatting_service(request: Request) -> RecipeFormattingService:
    """Get the recipe formatting service from app state.

    Raises:
        ServiceUnavailableException: If the service is not initialized.
    """
    service: RecipeFormattingService | None = getattr(
        request.app.state, "formatting_service", None
    )
    if service is None:
        msg = "Recipe formatting service not available"
        raise ServiceUnavailableException(msg)
    return service


async def get_import_service(request: Request) -> RecipeImportService:
    """Get the recipe import service from app state.

    Raises:
        ServiceUnavailableException: If the service is not initialized.
    """
    service: RecipeImportService | None = getattr(
        request.app.state, "import_service", None
    )
    if service is None:
        msg = "Recipe import service not available"
        raise ServiceUnavailableException(msg)
    return service


async def get_recipe_book(request: Request, user: ActingUserDep) -> RecipeBook:
    """Get the recipe state of the acting identity, loaded.

    With a remote data store every identity has its own session; the
    local recipe book is shared.

    Raises:
        ServiceUnavailableException: If neither backend is initialized.
    """
    registry = getattr(request.app.state, "recipe_registry", None)
    book: RecipeBook | None
    if registry is not None:
        book = registry.get(user)
    else:
        book = getattr(request.app.state, "recipe_book", None)

    if book is None:
        msg = "Recipe storage not available"
        raise ServiceUnavailableException(msg)

    if not book.is_loaded:
        await book.load(user)
    return book


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
RecipeBookDep = Annotated[RecipeBook, Depends(get_recipe_book)]
FormattingServiceDep = Annotated[RecipeFormattingService, Depends(get_formatting_service)]
ImportServiceDep = Annotated[RecipeImportService, Depends(get_import_service)]
