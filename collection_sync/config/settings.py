"""
Settings Configuration
======================

Environment variable management using pydantic-settings.
Follows the 12-factor app methodology.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_COLLECTIONS_FILE = Path(__file__).resolve().parents[1] / "data" / "collections.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Server Configuration
    # -------------------------------------------------------------------------
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, ge=1, le=65535, description="Server port")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Deployment environment"
    )

    # -------------------------------------------------------------------------
    # Shopify Configuration
    # -------------------------------------------------------------------------
    shopify_store: str | None = Field(
        default=None, description="Store name, the part before .myshopify.com"
    )
    shopify_token: str | None = Field(
        default=None, description="Admin API access token"
    )
    shopify_webhook_secret: str | None = Field(
        default=None, description="Shared secret used to sign webhooks"
    )
    shopify_api_version: str = Field(
        default="2023-10", description="Admin REST API version"
    )
    http_timeout: float = Field(
        default=30.0, ge=1.0, le=300.0, description="Outbound request timeout in seconds"
    )

    # -------------------------------------------------------------------------
    # Taxonomy Configuration
    # -------------------------------------------------------------------------
    collections_file: Path = Field(
        default=DEFAULT_COLLECTIONS_FILE,
        description="JSON snapshot of the store's collections",
    )

    # -------------------------------------------------------------------------
    # Processing Configuration
    # -------------------------------------------------------------------------
    write_max_retries: int = Field(
        default=3, ge=0, le=10, description="Retries per collection write"
    )
    retry_delay_seconds: float = Field(
        default=2.0, ge=0.0, description="Backoff between write attempts"
    )
    collection_pacing_seconds: float = Field(
        default=1.0, ge=0.0, description="Pause after each successful collection write"
    )
    batch_window_minutes: int = Field(
        default=60, ge=1, description="Trailing window for the batch product query"
    )
    sku_wait_timeout: float = Field(
        default=30.0, ge=0.0, description="Max seconds to wait for variant SKUs (0 disables)"
    )
    sku_poll_interval: float = Field(
        default=5.0, gt=0.0, description="Seconds between SKU readiness polls"
    )

    @property
    def shopify_base_url(self) -> str:
        """Construct the Admin REST API base URL."""
        return f"https://{self.shopify_store}.myshopify.com/admin/api/{self.shopify_api_version}"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once
    and reused across the application.
    """
    return Settings()
