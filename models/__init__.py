"""
Pydantic models for request/response validation.
"""

from models.base import BaseSchema
from models.mapping import LocationEntry, MappingTable, MappingUploadResponse
from models.sync import (
    InventoryLevelPayload,
    VariantInfo,
    UpsertItem,
    SyncOutcome,
    SyncResult,
)

__all__ = [
    "BaseSchema",
    # Mapping
    "LocationEntry",
    "MappingTable",
    "MappingUploadResponse",
    # Sync
    "InventoryLevelPayload",
    "VariantInfo",
    "UpsertItem",
    "SyncOutcome",
    "SyncResult",
]
