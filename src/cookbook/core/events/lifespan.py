"""Application lifespan event handlers.

Startup builds the collaborators every request shares and parks them on
``app.state``; shutdown closes them again in reverse order.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from cookbook.auth.providers import initialize_auth_provider, shutdown_auth_provider
from cookbook.core.config import Settings, StoreMode, get_settings
from cookbook.llm.client import TextGenerationClient
from cookbook.observability.logging import get_logger, setup_logging
from cookbook.services.formatting import RecipeFormattingService
from cookbook.services.importing import RecipeImportService
from cookbook.services.store import RestDataStoreClient
from cookbook.services.sync import (
    LocalRecipeBook,
    RecipeSessionRegistry,
    fallback_recipes,
)


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI


logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # Auth is critical - don't continue without it
    await _init_auth(settings)

    await _init_gateways(app, settings)
    await _init_store(app, settings)

    logger.info("Application startup complete")


async def _init_auth(settings: Settings) -> None:
    try:
        await initialize_auth_provider(settings)
        logger.info("Auth provider initialized", mode=settings.auth.mode)
    except Exception:
        logger.exception("Failed to initialize auth provider")
        raise


async def _init_gateways(app: FastAPI, settings: Settings) -> None:
    """Create the text-generation client and the two gateway services."""
    llm_client = TextGenerationClient(
        settings.text_generation.url,
        timeout=settings.text_generation.timeout,
        max_retries=settings.text_generation.max_retries,
        requests_per_minute=settings.text_generation.requests_per_minute,
        seed_max=settings.text_generation.seed_max,
        token=settings.TEXT_GENERATION_TOKEN,
    )
    await llm_client.initialize()
    app.state.llm_client = llm_client
    app.state.formatting_service = RecipeFormattingService(llm_client)

    try:
        import_service = RecipeImportService(llm_client, settings.importing)
        await import_service.initialize()
        app.state.import_service = import_service
    except Exception:
        logger.exception("Failed to initialize RecipeImportService - import unavailable")
        app.state.import_service = None


async def _init_store(app: FastAPI, settings: Settings) -> None:
    """Set up either the remote session registry or the local recipe book."""
    fallback = fallback_recipes(settings.image_generation)
    app.state.data_store = None
    app.state.recipe_registry = None
    app.state.recipe_book = None

    if settings.store_mode_enum == StoreMode.REMOTE:
        if settings.store.url:
            store = RestDataStoreClient(settings)
            await store.initialize()
            app.state.data_store = store
            app.state.recipe_registry = RecipeSessionRegistry(
                store,
                max_sessions=settings.sessions.max_sessions,
                recipes_table=settings.store.recipes_table,
                favorites_table=settings.store.favorites_table,
                fallback=fallback,
            )
            logger.info("Remote data store configured", base_url=store.base_url)
            return

        logger.warning("store.url is not set - falling back to the local recipe book")

    app.state.recipe_book = LocalRecipeBook(settings.store.local_path, fallback=fallback)
    logger.info("Local recipe book configured", path=settings.store.local_path)


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services."""
    logger.info("Shutting down application")

    registry = getattr(app.state, "recipe_registry", None)
    if registry is not None:
        registry.clear()

    data_store = getattr(app.state, "data_store", None)
    if data_store is not None:
        await data_store.shutdown()

    import_service = getattr(app.state, "import_service", None)
    if import_service is not None:
        await import_service.shutdown()

    llm_client = getattr(app.state, "llm_client", None)
    if llm_client is not None:
        await llm_client.shutdown()

    await shutdown_auth_provider()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Uses the settings the app was created with, if any.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)
