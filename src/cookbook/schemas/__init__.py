"""API request and response schemas."""

from cookbook.schemas.base import APIRequest, APIResponse
from cookbook.schemas.health import HealthResponse, ReadinessResponse
from cookbook.schemas.recipe import (
    CookupRequest,
    FavoriteRequest,
    FormatRecipeRequest,
    IngredientSchema,
    MutationResponse,
    RecipeCreateRequest,
    RecipeDetailResponse,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdateRequest,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "CookupRequest",
    "FavoriteRequest",
    "FormatRecipeRequest",
    "HealthResponse",
    "IngredientSchema",
    "MutationResponse",
    "ReadinessResponse",
    "RecipeCreateRequest",
    "RecipeDetailResponse",
    "RecipeListResponse",
    "RecipeResponse",
    "RecipeUpdateRequest",
]
