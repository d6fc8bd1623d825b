"""Configuration module with YAML and environment variable support."""

from .settings import AuthMode, Settings, StoreMode, get_settings


__all__ = [
    "AuthMode",
    "Settings",
    "StoreMode",
    "get_settings",
]
