"""Application configuration using Pydantic Settings with YAML support.

Configuration is loaded from (highest priority first):
1. Values passed to ``Settings()``
2. Environment variables (nested delimiter ``__``, e.g. ``STORE__MODE=local``)
3. ``.env`` file (secrets)
4. YAML files: ``config/base/*.yaml`` overlaid by ``config/environments/{APP_ENV}/``
5. Defaults in code
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


class AuthMode(StrEnum):
    """How the acting identity is established.

    - HEADER: trusted gateway headers (X-User-ID / X-User-Email)
    - LOCAL_JWT: hosted-backend access token validated with the shared secret
    - DISABLED: every request is anonymous
    """

    HEADER = "header"
    LOCAL_JWT = "local_jwt"
    DISABLED = "disabled"


class StoreMode(StrEnum):
    """Where recipes are persisted."""

    REMOTE = "remote"
    LOCAL = "local"


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Galley Cookbook"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    prefix: str = "/api"
    cors_origins: list[str] = []


class AuthHeaderSettings(BaseModel):
    """Header names used in header auth mode."""

    user_id: str = "X-User-ID"
    email: str = "X-User-Email"


class AuthJwtSettings(BaseModel):
    """Access token validation settings."""

    algorithm: str = "HS256"
    audience: list[str] = ["authenticated"]
    issuer: str | None = None


class AuthSettings(BaseModel):
    """Authentication configuration settings."""

    mode: str = "header"
    headers: AuthHeaderSettings = AuthHeaderSettings()
    jwt: AuthJwtSettings = AuthJwtSettings()


class StoreSettings(BaseModel):
    """Recipe persistence settings."""

    mode: str = "remote"
    url: str | None = None
    recipes_table: str = "recipes"
    favorites_table: str = "favorites"
    timeout: float = 10.0
    local_path: str = "data/recipes.json"


class TextGenerationSettings(BaseModel):
    """Text-generation endpoint used for formatting and import."""

    url: str = "https://text.pollinations.ai/"
    timeout: float = 60.0
    max_retries: int = 2
    requests_per_minute: float = 20.0
    seed_max: int = 1_000_000


class ImageGenerationSettings(BaseModel):
    """Image-generation URL template."""

    url: str = "https://image.pollinations.ai/prompt"
    width: int = 1200
    height: int = 800
    style: str = "3d cartoon style delicious food shiny vibrant colorful"


class ImportingSettings(BaseModel):
    """Recipe page import settings."""

    fetch_timeout: float = 20.0
    max_chars: int = 8000
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/119.0.0.0 Safari/537.36"
    )


class SessionSettings(BaseModel):
    """In-process recipe sessions."""

    max_sessions: int = 500


class RateLimitingSettings(BaseModel):
    """Rate limiting configuration."""

    default: str = "120/minute"
    gateway: str = "10/minute"
    storage_uri: str = "memory://"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


class MetricsSettings(BaseModel):
    """Metrics configuration settings."""

    enabled: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration settings."""

    metrics: MetricsSettings = MetricsSettings()


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    store: StoreSettings = StoreSettings()
    text_generation: TextGenerationSettings = TextGenerationSettings()
    image_generation: ImageGenerationSettings = ImageGenerationSettings()
    importing: ImportingSettings = ImportingSettings()
    sessions: SessionSettings = SessionSettings()
    rate_limiting: RateLimitingSettings = RateLimitingSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    # Secrets (from environment / .env only - never in YAML)
    JWT_SECRET_KEY: str = ""
    STORE_API_KEY: str = ""
    TEXT_GENERATION_TOKEN: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def auth_mode_enum(self) -> AuthMode:
        """Get auth mode as enum with validation."""
        try:
            return AuthMode(self.auth.mode.lower())
        except ValueError:
            msg = (
                f"Invalid auth mode: {self.auth.mode}. "
                f"Must be one of: {', '.join(m.value for m in AuthMode)}"
            )
            raise ValueError(msg) from None

    @property
    def store_mode_enum(self) -> StoreMode:
        """Get store mode as enum with validation."""
        try:
            return StoreMode(self.store.mode.lower())
        except ValueError:
            msg = (
                f"Invalid store mode: {self.store.mode}. "
                f"Must be one of: {', '.join(m.value for m in StoreMode)}"
            )
            raise ValueError(msg) from None

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
