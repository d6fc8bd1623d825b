"""Unit tests for settings loading."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cookbook.core.config import AuthMode, Settings, StoreMode
from cookbook.core.config.yaml_source import deep_merge


if TYPE_CHECKING:
    from pathlib import Path


pytestmark = pytest.mark.unit


class TestYamlLayers:
    """Tests for base + environment YAML merging."""

    def test_test_profile_overrides_base(self, test_settings: Settings) -> None:
        assert test_settings.APP_ENV == "test"
        assert test_settings.is_testing is True
        assert test_settings.store.url == "http://store.test"
        assert test_settings.observability.metrics.enabled is False

    def test_base_values_survive_overlay(self, test_settings: Settings) -> None:
        assert test_settings.store.recipes_table == "recipes"
        assert test_settings.image_generation.width == 1200
        assert test_settings.text_generation.seed_max == 1_000_000

    def test_environment_variables_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORE__MODE", "local")
        monkeypatch.setenv("TEXT_GENERATION__MAX_RETRIES", "5")

        settings = Settings()

        assert settings.store_mode_enum == StoreMode.LOCAL
        assert settings.text_generation.max_retries == 5

    def test_custom_config_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "base").mkdir()
        (tmp_path / "base" / "app.yaml").write_text("app:\n  name: Kombüse\n", encoding="utf-8")
        monkeypatch.setenv("COOKBOOK_CONFIG_DIR", str(tmp_path))

        settings = Settings()

        assert settings.app.name == "Kombüse"
        assert settings.api.prefix == "/api"


class TestEnums:
    """Tests for mode helpers."""

    def test_modes(self, test_settings: Settings) -> None:
        assert test_settings.auth_mode_enum == AuthMode.HEADER
        assert test_settings.store_mode_enum == StoreMode.REMOTE

    def test_invalid_store_mode(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(
            update={"store": test_settings.store.model_copy(update={"mode": "cloud"})}
        )

        with pytest.raises(ValueError, match="Invalid store mode"):
            _ = settings.store_mode_enum


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested(self) -> None:
        base = {"store": {"mode": "remote", "timeout": 10}, "app": {"debug": False}}

        merged = deep_merge(base, {"store": {"mode": "local"}})

        assert merged == {"store": {"mode": "local", "timeout": 10}, "app": {"debug": False}}
        assert base["store"]["mode"] == "remote"
