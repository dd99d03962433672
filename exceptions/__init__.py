"""
Custom exceptions module.

All errors derive from AppError and know their HTTP status.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    UnauthorizedError,
    ConfigurationError,
    ValidationError,
    ExternalServiceError,

    # Mapping CSV
    MappingParseError,
    MappingMissingColumnsError,
    MappingTableCorruptError,

    # Integrations
    ShopifyError,
    SkuLabsError,
    BlobStoreError,
)

__all__ = [
    # Base
    "AppError",
    "UnauthorizedError",
    "ConfigurationError",
    "ValidationError",
    "ExternalServiceError",

    # Mapping CSV
    "MappingParseError",
    "MappingMissingColumnsError",
    "MappingTableCorruptError",

    # Integrations
    "ShopifyError",
    "SkuLabsError",
    "BlobStoreError",
]
