"""Application configuration using Pydantic Settings.

Reads configuration from environment variables (or a local .env file)
with sensible defaults for local development.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PACKTRACK_",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    environment: Literal["prod", "staging", "dev"] = Field(
        default="dev",
        description="Environment name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # =========================================================================
    # Remote store (spreadsheet web app)
    # =========================================================================
    store_url: str = Field(
        default="",
        description="Spreadsheet web app URL; empty means no remote store",
    )
    store_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Remote store request timeout in seconds",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def store_configured(self) -> bool:
        """Whether a remote store endpoint is configured."""
        return bool(self.store_url.strip())

    # =========================================================================
    # Package catalog
    # =========================================================================
    catalog_path: str = Field(
        default="",
        description="Optional YAML file overriding package groups and ratios",
    )

    # =========================================================================
    # Sample data
    # =========================================================================
    sample_size: int = Field(
        default=50,
        ge=0,
        description="Number of sample records generated when no store is configured",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Output logs as JSON",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for convenience
settings = get_settings()
