"""Unit tests for LocalRecipeBook."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson
import pytest

from cookbook.models import Recipe
from cookbook.services.sync import LocalRecipeBook


if TYPE_CHECKING:
    from pathlib import Path

    from cookbook.models import ActingUser


pytestmark = pytest.mark.unit


@pytest.fixture
def book_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "recipes.json"


@pytest.fixture
def book(book_path: Path) -> LocalRecipeBook:
    return LocalRecipeBook(book_path)


class TestLoad:
    """Tests for loading and seeding the book."""

    async def test_seeds_missing_file(self, book: LocalRecipeBook, book_path: Path) -> None:
        recipes = await book.load()

        assert [r.id for r in recipes] == ["system-1", "system-2"]
        assert book.is_loaded is True
        stored = orjson.loads(book_path.read_bytes())
        assert [r["title"] for r in stored] == [
            "Affogato",
            "Kartoffeln mit Spinat und Spiegelei",
        ]

    async def test_reads_existing_file(self, book_path: Path) -> None:
        book_path.parent.mkdir(parents=True)
        book_path.write_bytes(orjson.dumps([{"id": "local-1", "title": "Pannfisch"}]))

        recipes = await LocalRecipeBook(book_path).load()

        assert recipes == [Recipe(id="local-1", title="Pannfisch")]

    async def test_corrupt_file_yields_builtin_set(self, book_path: Path) -> None:
        book_path.parent.mkdir(parents=True)
        book_path.write_bytes(b"{not json")
        book = LocalRecipeBook(book_path)

        recipes = await book.load()

        assert [r.id for r in recipes] == ["system-1", "system-2"]
        assert book.is_loaded is True
        assert book_path.read_bytes() == b"{not json"

    async def test_corrupt_file_is_replaced_on_next_change(
        self,
        book_path: Path,
        user: ActingUser,
    ) -> None:
        book_path.parent.mkdir(parents=True)
        book_path.write_bytes(orjson.dumps([{"id": "local-1"}]))
        book = LocalRecipeBook(book_path)
        await book.load()

        await book.add(user, Recipe(title="Pannfisch"))

        reopened = await LocalRecipeBook(book_path).load()
        assert [r.title for r in reopened] == [
            "Pannfisch",
            "Affogato",
            "Kartoffeln mit Spinat und Spiegelei",
        ]


class TestMutations:
    """Tests for add/update/favorite/delete persistence."""

    async def test_add_persists(
        self,
        book: LocalRecipeBook,
        book_path: Path,
        user: ActingUser,
    ) -> None:
        await book.load()

        result = await book.add(user, Recipe(title="Pannfisch"))

        assert result.committed is True
        assert result.recipe is not None
        assert result.recipe.id.startswith("local-")
        assert result.recipe.creator_id == "user-1"
        reopened = await LocalRecipeBook(book_path).load()
        assert reopened[0].title == "Pannfisch"

    async def test_update_keeps_ownership(
        self,
        book: LocalRecipeBook,
        user: ActingUser,
        other_user: ActingUser,
    ) -> None:
        await book.load()
        added = (await book.add(user, Recipe(title="Pannfisch"))).recipe
        assert added is not None

        result = await book.update(
            other_user,
            added.model_copy(update={"title": "Pannfisch mit Senf", "creator_id": "user-2"}),
        )

        assert result.committed is True
        assert book.get(added.id).title == "Pannfisch mit Senf"
        assert book.get(added.id).creator_id == "user-1"

    async def test_toggle_favorite_persists(
        self,
        book: LocalRecipeBook,
        book_path: Path,
    ) -> None:
        await book.load()

        await book.toggle_favorite(None, "system-1", True)

        reopened = await LocalRecipeBook(book_path).load()
        assert reopened[0].is_favorite is True

    async def test_delete_system_recipe(self, book: LocalRecipeBook) -> None:
        await book.load()

        result = await book.delete(None, "system-2")

        assert result.committed is True
        assert book.get("system-2") is None

    async def test_unknown_recipe(self, book: LocalRecipeBook) -> None:
        await book.load()

        assert (await book.delete(None, "nope")).committed is False
        assert (await book.toggle_favorite(None, "nope", True)).committed is False


class TestWriteFailure:
    """Tests for a book whose file cannot be written."""

    @pytest.fixture
    def blocked_book(self, tmp_path: Path) -> LocalRecipeBook:
        blocker = tmp_path / "blocker"
        blocker.write_text("kein Verzeichnis")
        return LocalRecipeBook(blocker / "recipes.json")

    async def test_load_still_serves_builtin_set(self, blocked_book: LocalRecipeBook) -> None:
        recipes = await blocked_book.load()

        assert [r.id for r in recipes] == ["system-1", "system-2"]

    async def test_mutations_are_not_applied(
        self,
        blocked_book: LocalRecipeBook,
        user: ActingUser,
    ) -> None:
        await blocked_book.load()
        before = blocked_book.recipes

        added = await blocked_book.add(user, Recipe(title="Pannfisch"))
        favorited = await blocked_book.toggle_favorite(user, "system-1", True)
        deleted = await blocked_book.delete(user, "system-2")

        assert added.committed is False
        assert added.recipe is None
        assert favorited.committed is False
        assert favorited.recipe is not None
        assert favorited.recipe.is_favorite is False
        assert deleted.committed is False
        assert blocked_book.recipes == before
