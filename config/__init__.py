"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    WAREHOUSE_NAME_MAP: Shopify -> SKU Labs warehouse names
    normalize_warehouse_name: Warehouse label translation
"""

from config.settings import settings, get_settings, Settings
from config.warehouses import (
    WAREHOUSE_NAME_MAP,
    DEFAULT_WAREHOUSE_KEY,
    normalize_warehouse_name,
)

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Warehouses
    "WAREHOUSE_NAME_MAP",
    "DEFAULT_WAREHOUSE_KEY",
    "normalize_warehouse_name",
]
