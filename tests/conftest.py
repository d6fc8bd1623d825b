"""Shared test fixtures for the cookbook service.

The environment is pinned to the ``test`` profile before anything from
``cookbook`` is imported, since settings are read at import time by the
rate limiter.
"""

from __future__ import annotations

import os
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]

os.environ["APP_ENV"] = "test"
os.environ["COOKBOOK_CONFIG_DIR"] = str(PROJECT_ROOT / "config")

from typing import TYPE_CHECKING, Any  # noqa: E402

import pytest  # noqa: E402

from cookbook.core.config import Settings, get_settings  # noqa: E402
from cookbook.models import ActingUser, Ingredient, Recipe  # noqa: E402
from cookbook.services.store import DataStoreResponseError  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import Generator


class FakeDataStore:
    """In-memory stand-in for the remote data store.

    Every call is appended to ``calls`` as ``(operation, table, payload)``.
    Operations named in ``fail_on`` (``"insert"``, ``"insert:favorites"``,
    ``"delete"``, ...) raise ``DataStoreResponseError`` instead.
    """

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = tables or {}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.fail_on: set[str] = set()
        self._next_id = 100

    def _check(self, operation: str, table: str) -> None:
        if operation in self.fail_on or f"{operation}:{table}" in self.fail_on:
            raise DataStoreResponseError(500, f"{operation} on {table} failed")

    @staticmethod
    def _matches(row: dict[str, Any], filters: dict[str, Any]) -> bool:
        return all(str(row.get(k)) == str(v) for k, v in filters.items())

    def calls_of(self, operation: str, table: str | None = None) -> list[dict[str, Any]]:
        return [
            payload
            for op, tbl, payload in self.calls
            if op == operation and (table is None or tbl == table)
        ]

    async def initialize(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    async def select(self, table: str, **filters: Any) -> list[dict[str, Any]]:
        self.calls.append(("select", table, filters))
        self._check("select", table)
        return [dict(r) for r in self.tables.get(table, []) if self._matches(r, filters)]

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("insert", table, row))
        self._check("insert", table)
        stored = {"id": str(self._next_id), **row}
        self._next_id += 1
        self.tables.setdefault(table, []).append(stored)
        return dict(stored)

    async def update(
        self, table: str, values: dict[str, Any], **filters: Any
    ) -> list[dict[str, Any]]:
        self.calls.append(("update", table, {"values": values, **filters}))
        self._check("update", table)
        updated = []
        for row in self.tables.get(table, []):
            if self._matches(row, filters):
                row.update(values)
                updated.append(dict(row))
        return updated

    async def delete(self, table: str, **filters: Any) -> None:
        self.calls.append(("delete", table, filters))
        self._check("delete", table)
        self.tables[table] = [
            r for r in self.tables.get(table, []) if not self._matches(r, filters)
        ]


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None]:
    """Clear cached settings so each test sees its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings of the ``test`` profile."""
    return get_settings()


@pytest.fixture
def user() -> ActingUser:
    return ActingUser(id="user-1", email="koch@example.com")


@pytest.fixture
def other_user() -> ActingUser:
    return ActingUser(id="user-2", email="smutje@example.com")


@pytest.fixture
def fake_store() -> FakeDataStore:
    """Empty fake data store."""
    return FakeDataStore()


@pytest.fixture
def system_recipe() -> Recipe:
    return Recipe(
        id="system-1",
        title="Affogato",
        ingredients=[Ingredient(amount="1 Kugel", item="Vanilleeis")],
        steps=["Espresso über das Eis gießen."],
        is_system_recipe=True,
        is_vegetarian=True,
    )


@pytest.fixture
def recipe_rows() -> list[dict[str, Any]]:
    """Two stored recipe rows: one owned by ``user-1``, one by ``user-2``."""
    return [
        {
            "id": 1,
            "title": "Labskaus",
            "ingredients": '[{"amount": "500g", "item": "Corned Beef"}]',
            "steps": '["Alles zerstampfen."]',
            "image_url": "",
            "portions": 4,
            "user_id": "user-1",
            "author_email": "koch@example.com",
            "is_system_recipe": False,
        },
        {
            "id": 2,
            "title": "Fischbrötchen",
            "ingredients": [{"amount": "1", "item": "Brötchen"}],
            "steps": ["Belegen."],
            "image_url": "",
            "portions": None,
            "user_id": "user-2",
            "author_email": "smutje@example.com",
            "is_system_recipe": False,
        },
    ]
