"""
Configuration settings using Pydantic Settings.

Values are loaded from environment variables or a local ``.env`` file.
"""

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Ensure .env values take precedence over system environment variables.
    # Order: init kwargs > .env (dotenv) > env vars > file secrets
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ):
        return (
            init_settings,
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )

    # Data Dragon (static item catalog)
    ddragon_base_url: str = Field(
        "https://ddragon.leagueoflegends.com", alias="DDRAGON_BASE_URL"
    )
    ddragon_locale: str = Field("en_US", alias="DDRAGON_LOCALE")
    ddragon_version_window: int = Field(
        3,
        ge=1,
        alias="DDRAGON_VERSION_WINDOW",
        description="How many recent game versions to search for an item",
    )
    ddragon_timeout_seconds: float = Field(10.0, gt=0, alias="DDRAGON_TIMEOUT_SECONDS")
    item_catalog_ttl_seconds: int = Field(86400, ge=0, alias="ITEM_CATALOG_TTL_SECONDS")

    # Analysis limits
    analysis_max_matches: int = Field(100, ge=1, alias="ANALYSIS_MAX_MATCHES")
    analysis_max_workers: int = Field(4, ge=1, alias="ANALYSIS_MAX_WORKERS")

    # Application Configuration
    app_name: str = Field("matchlens", alias="APP_NAME")
    app_env: str = Field("development", alias="APP_ENV")
    app_log_level: str = Field("INFO", alias="APP_LOG_LEVEL")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"


# Global settings instance. Every field has a default, so this never fails
# on a bare environment.
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance.

    This function provides dependency injection support for settings.
    """
    return settings
