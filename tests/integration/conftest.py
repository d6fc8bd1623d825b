"""Integration test fixtures.

The ASGI transport does not run the lifespan, so the fixtures put the
collaborators on ``app.state`` themselves: a fake data store behind a
real session registry, and gateway services whose outbound calls are
mocked with respx.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from cookbook.auth.providers import HeaderAuthProvider, set_auth_provider, shutdown_auth_provider
from cookbook.factory import create_app
from cookbook.llm.client import TextGenerationClient
from cookbook.services.formatting import RecipeFormattingService
from cookbook.services.importing import RecipeImportService
from cookbook.services.sync import LocalRecipeBook, RecipeSessionRegistry
from tests.fixtures.text_generation import TEXT_GENERATION_URL


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

    from fastapi import FastAPI

    from cookbook.core.config import Settings
    from tests.conftest import FakeDataStore


pytestmark = pytest.mark.integration

USER_HEADERS = {"X-User-ID": "user-1", "X-User-Email": "koch@example.com"}


@pytest.fixture
async def app(test_settings: Settings, fake_store: FakeDataStore) -> AsyncGenerator[FastAPI]:
    """Application wired to the fake data store."""
    app = create_app(test_settings)

    llm_client = TextGenerationClient(
        TEXT_GENERATION_URL,
        max_retries=0,
        requests_per_minute=test_settings.text_generation.requests_per_minute,
    )
    import_service = RecipeImportService(llm_client, test_settings.importing)
    await import_service.initialize()

    app.state.llm_client = llm_client
    app.state.formatting_service = RecipeFormattingService(llm_client)
    app.state.import_service = import_service
    app.state.recipe_registry = RecipeSessionRegistry(fake_store)
    set_auth_provider(HeaderAuthProvider())

    yield app

    await import_service.shutdown()
    await llm_client.shutdown()
    await shutdown_auth_provider()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Anonymous client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def user_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Client acting as ``user-1`` through the trusted gateway headers."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=USER_HEADERS,
    ) as ac:
        yield ac


@pytest.fixture
async def local_client(
    app: FastAPI,
    tmp_path: Path,
) -> AsyncGenerator[AsyncClient]:
    """Client of an application running on the local recipe book."""
    app.state.recipe_registry = None
    app.state.recipe_book = LocalRecipeBook(tmp_path / "recipes.json")
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
