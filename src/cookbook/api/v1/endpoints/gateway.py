"""Gateway endpoints in front of the text-generation service.

Both endpoints answer with the generated recipe or with ``{"error": ...}``
carrying a German message for the user.
"""

from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import ORJSONResponse

from cookbook.api.dependencies import FormattingServiceDep, ImportServiceDep
from cookbook.core.rate_limit import rate_limit_gateway
from cookbook.llm.prompts import GeneratedRecipe
from cookbook.observability.logging import get_logger
from cookbook.schemas import FormatRecipeRequest
from cookbook.services.formatting import RecipeFormattingError
from cookbook.services.importing import InvalidImportURLError, RecipeImportError


logger = get_logger(__name__)

router = APIRouter(tags=["gateway"])


def _recipe_response(recipe: GeneratedRecipe) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status.HTTP_200_OK,
        content=recipe.model_dump(exclude_none=True),
    )


def _error_response(status_code: int, message: str) -> ORJSONResponse:
    return ORJSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/format-recipe",
    summary="Format raw recipe fragments",
    description=(
        "Turns a title, ingredient fragments and rough steps into a complete "
        "recipe using the text-generation endpoint."
    ),
    responses={
        200: {"description": "Formatted recipe {title, ingredients, steps}"},
        500: {"description": "Formatting failed"},
    },
)
@rate_limit_gateway()
async def format_recipe(
    request: Request,
    service: FormattingServiceDep,
) -> ORJSONResponse:
    """Format a recipe draft ``{title, ingredients, steps}``.

    Like every other failure, a body that is not such a draft is answered
    with the documented 500.
    """
    try:
        body = FormatRecipeRequest.model_validate(await request.json())
    except ValueError as e:
        logger.debug("Format request rejected", error=str(e))
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, RecipeFormattingError.user_message
        )

    try:
        recipe = await service.format(body.title, body.ingredients, body.steps)
    except RecipeFormattingError as e:
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e.user_message)

    return _recipe_response(recipe)


@router.post(
    "/import-recipe",
    summary="Import a recipe from a web page",
    description=(
        "Fetches the page at ``url``, reduces it to text and extracts a "
        "recipe from it using the text-generation endpoint."
    ),
    responses={
        200: {"description": "Extracted recipe {title, ingredients, steps}"},
        400: {"description": "Missing or invalid URL"},
        500: {"description": "Page could not be loaded or parsed"},
    },
)
@rate_limit_gateway()
async def import_recipe(
    request: Request,
    service: ImportServiceDep,
) -> ORJSONResponse:
    """Import a recipe from ``{"url": ...}``.

    The body is read by hand so that a missing or malformed ``url`` is
    answered with the documented 400 instead of a validation error.
    """
    try:
        payload: Any = await request.json()
    except ValueError:
        payload = None

    url = payload.get("url") if isinstance(payload, dict) else None

    try:
        recipe = await service.import_from_url(url)
    except InvalidImportURLError as e:
        logger.debug("Import rejected", error=str(e))
        return _error_response(e.status_code, e.user_message)
    except RecipeImportError as e:
        return _error_response(e.status_code, e.user_message)

    return _recipe_response(recipe)
