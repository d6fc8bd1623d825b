"""Recipe endpoints.

Provides the merged recipe list of the acting identity and the views
built on it (swipe deck, favorites, logbook, scaled detail), plus the
optimistic mutations. A mutation whose remote write failed is answered
with ``committed: false`` and the state as it was before.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Path, Query, status

from cookbook.api.dependencies import FormattingServiceDep, RecipeBookDep, SettingsDep
from cookbook.auth import ActingUserDep
from cookbook.core.exceptions import NotFoundException
from cookbook.observability.logging import get_logger
from cookbook.schemas import (
    CookupRequest,
    FavoriteRequest,
    MutationResponse,
    RecipeCreateRequest,
    RecipeDetailResponse,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdateRequest,
)
from cookbook.services.formatting import RecipeFormattingError
from cookbook.services.views import (
    assemble_cookup_recipe,
    build_deck,
    can_edit,
    favorite_recipes,
    logbook,
    scale_recipe,
)


if TYPE_CHECKING:
    from cookbook.models import Recipe


logger = get_logger(__name__)

router = APIRouter(prefix="/recipes", tags=["Recipes"])

RecipeIdPath = Annotated[str, Path(min_length=1, description="Recipe id")]


def _list_response(recipes: list[Recipe], *, is_loaded: bool) -> RecipeListResponse:
    return RecipeListResponse(
        recipes=[RecipeResponse.from_recipe(r) for r in recipes],
        is_loaded=is_loaded,
    )


# =============================================================================
# Reads
# =============================================================================


@router.get(
    "",
    response_model=RecipeListResponse,
    summary="List recipes",
    description=(
        "Merged recipe list of the acting identity: every recipe with the "
        "user's favorite flags applied. Falls back to the built-in recipes "
        "when the store is empty or unreachable."
    ),
)
async def list_recipes(
    user: ActingUserDep,
    book: RecipeBookDep,
    refresh: Annotated[
        bool, Query(description="Reload from the store instead of the cache")
    ] = False,
) -> RecipeListResponse:
    if refresh:
        await book.load(user, force=True)
    return _list_response(book.recipes, is_loaded=book.is_loaded)


@router.get(
    "/deck",
    response_model=RecipeListResponse,
    summary="Swipe deck",
    description="Shuffled recipes, repeated so the deck does not run out.",
)
async def get_deck(
    book: RecipeBookDep,
    copies: Annotated[int, Query(ge=1, le=10)] = 3,
) -> RecipeListResponse:
    return _list_response(build_deck(book.recipes, copies), is_loaded=book.is_loaded)


@router.get(
    "/favorites",
    response_model=RecipeListResponse,
    summary="Favorite recipes",
)
async def get_favorites(book: RecipeBookDep) -> RecipeListResponse:
    return _list_response(favorite_recipes(book.recipes), is_loaded=book.is_loaded)


@router.get(
    "/logbook",
    response_model=RecipeListResponse,
    summary="Logbook",
    description="Recipes the acting user favorited or created.",
)
async def get_logbook(user: ActingUserDep, book: RecipeBookDep) -> RecipeListResponse:
    user_id = user.id if user else None
    return _list_response(logbook(book.recipes, user_id), is_loaded=book.is_loaded)


@router.get(
    "/{recipe_id}",
    response_model=RecipeDetailResponse,
    summary="Recipe detail",
    description="One recipe with ingredient amounts scaled to ``portions``.",
    responses={404: {"description": "Recipe not found"}},
)
async def get_recipe(
    recipe_id: RecipeIdPath,
    user: ActingUserDep,
    book: RecipeBookDep,
    portions: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> RecipeDetailResponse:
    recipe = book.get(recipe_id)
    if recipe is None:
        raise NotFoundException("Recipe", recipe_id)

    scaled = scale_recipe(recipe, portions)
    return RecipeDetailResponse(
        **RecipeResponse.from_recipe(scaled).model_dump(),
        base_portions=recipe.portions,
        can_edit=can_edit(recipe, user.id if user else None),
    )


# =============================================================================
# Mutations
# =============================================================================


@router.post(
    "",
    response_model=MutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a recipe",
)
async def create_recipe(
    body: RecipeCreateRequest,
    user: ActingUserDep,
    book: RecipeBookDep,
) -> MutationResponse:
    result = await book.add(user, body.to_recipe())
    return MutationResponse.from_result(result)


@router.post(
    "/cookup",
    response_model=MutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Cook up a recipe",
    description=(
        "Formats raw fragments through the text-generation endpoint, falls "
        "back to the raw input when formatting fails, adds an illustration "
        "unless an image was uploaded, and saves the result."
    ),
)
async def cookup_recipe(
    body: CookupRequest,
    user: ActingUserDep,
    book: RecipeBookDep,
    formatter: FormattingServiceDep,
    settings: SettingsDep,
) -> MutationResponse:
    try:
        generated = await formatter.format(body.title, body.ingredients, body.steps)
    except RecipeFormattingError as e:
        logger.info("Cook up continues with raw input", error=str(e))
        generated = None

    recipe = assemble_cookup_recipe(
        title=body.title,
        ingredients=body.ingredients,
        steps=body.steps,
        generated=generated,
        image_url=body.image_url,
        image_settings=settings.image_generation,
    )
    result = await book.add(user, recipe)
    return MutationResponse.from_result(result)


@router.put(
    "/{recipe_id}",
    response_model=MutationResponse,
    summary="Update a recipe",
    description="Replaces every editable field, the favorite flag included.",
    responses={404: {"description": "Recipe not found"}},
)
async def update_recipe(
    recipe_id: RecipeIdPath,
    body: RecipeUpdateRequest,
    user: ActingUserDep,
    book: RecipeBookDep,
) -> MutationResponse:
    if book.get(recipe_id) is None:
        raise NotFoundException("Recipe", recipe_id)

    result = await book.update(user, body.to_recipe(recipe_id, is_favorite=body.is_favorite))
    return MutationResponse.from_result(result)


@router.put(
    "/{recipe_id}/favorite",
    response_model=MutationResponse,
    summary="Set or clear the favorite flag",
    description=(
        "Favoriting a built-in recipe stores an owned copy of it for the "
        "acting user; the response carries the copy's id."
    ),
    responses={404: {"description": "Recipe not found"}},
)
async def set_favorite(
    recipe_id: RecipeIdPath,
    body: FavoriteRequest,
    user: ActingUserDep,
    book: RecipeBookDep,
) -> MutationResponse:
    if book.get(recipe_id) is None:
        raise NotFoundException("Recipe", recipe_id)

    result = await book.toggle_favorite(user, recipe_id, body.is_favorite)
    return MutationResponse.from_result(result)


@router.delete(
    "/{recipe_id}",
    response_model=MutationResponse,
    summary="Delete a recipe",
    responses={404: {"description": "Recipe not found"}},
)
async def delete_recipe(
    recipe_id: RecipeIdPath,
    user: ActingUserDep,
    book: RecipeBookDep,
) -> MutationResponse:
    if book.get(recipe_id) is None:
        raise NotFoundException("Recipe", recipe_id)

    result = await book.delete(user, recipe_id)
    return MutationResponse.from_result(result)
