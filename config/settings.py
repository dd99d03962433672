"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
Secrets are optional at load time; each operation declares the ones it
needs through Settings.require().
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional

from exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SHOPIFY
    # ===================
    shopify_webhook_secret: Optional[str] = Field(
        None,
        description="Shared secret used to sign Shopify webhooks"
    )
    shopify_store_domain: Optional[str] = Field(
        None,
        description="Shopify store domain, e.g. my-shop.myshopify.com"
    )
    shopify_admin_token: Optional[str] = Field(
        None,
        description="Shopify Admin API access token"
    )
    shopify_api_version: str = Field(
        default="2025-01",
        pattern=r"^\d{4}-\d{2}$",
        description="Shopify Admin REST API version"
    )

    # ===================
    # SKU LABS
    # ===================
    skulabs_api_token: Optional[str] = Field(
        None,
        description="SKU Labs API bearer token"
    )
    skulabs_base_url: str = Field(
        default="https://api.skulabs.com",
        description="SKU Labs API base URL"
    )

    # ===================
    # MAPPING UPLOAD
    # ===================
    admin_upload_secret: Optional[str] = Field(
        None,
        description="Secret expected in the X-Admin-Secret header of mapping uploads"
    )

    # ===================
    # NETLIFY BLOBS
    # ===================
    netlify_site_id: Optional[str] = Field(
        None,
        description="Netlify site ID owning the blob store"
    )
    netlify_blobs_token: Optional[str] = Field(
        None,
        description="Netlify personal access token for the Blobs API"
    )
    netlify_api_url: str = Field(
        default="https://api.netlify.com",
        description="Netlify API base URL"
    )
    blobs_store_name: str = Field(
        default="skulabs-sync-cache",
        min_length=1,
        description="Blob store holding the SKU mapping table"
    )

    # ===================
    # HTTP
    # ===================
    http_timeout_seconds: float = Field(
        default=10,
        gt=0,
        le=120,
        description="Timeout for outbound HTTP calls"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def shopify_configured(self) -> bool:
        """Check if the Shopify Admin API is configured."""
        return bool(self.shopify_store_domain and self.shopify_admin_token)

    @property
    def skulabs_configured(self) -> bool:
        """Check if SKU Labs is configured."""
        return bool(self.skulabs_api_token)

    @property
    def blobs_configured(self) -> bool:
        """Check if the Netlify blob store is configured."""
        return bool(self.netlify_site_id and self.netlify_blobs_token)

    def require(self, *fields: str) -> None:
        """
        Fail fast when settings needed by an operation are missing.

        Args:
            fields: Setting names that must be non-empty

        Raises:
            ConfigurationError: If any of the settings is unset
        """
        missing = [name for name in fields if not getattr(self, name)]
        if missing:
            raise ConfigurationError(missing)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
