"""YAML settings source merging base and per-environment files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict with ``override`` merged recursively into ``base``."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_dir(directory: Path, into: dict[str, Any]) -> dict[str, Any]:
    if not directory.is_dir():
        return into
    for yaml_file in sorted(directory.glob("*.yaml")):
        with yaml_file.open(encoding="utf-8") as f:
            into = deep_merge(into, yaml.safe_load(f) or {})
    return into


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load ``config/base/*.yaml`` then overlay ``config/environments/{APP_ENV}``.

    The config directory defaults to ``<project root>/config`` and can be
    moved with the ``COOKBOOK_CONFIG_DIR`` environment variable.
    """

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        self._config_dir = self._find_config_dir()
        self._app_env = os.getenv("APP_ENV", "development")
        merged = _load_dir(self._config_dir / "base", {})
        self._yaml_data = _load_dir(
            self._config_dir / "environments" / self._app_env, merged
        )

    def _find_config_dir(self) -> Path:
        override = os.getenv("COOKBOOK_CONFIG_DIR")
        if override:
            return Path(override)
        # src/cookbook/core/config/yaml_source.py -> project root
        return Path(__file__).resolve().parents[4] / "config"

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        """Get the value for a single top-level section."""
        value = self._yaml_data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        return self._yaml_data
