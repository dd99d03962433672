"""
Business logic services.

Each service handles one domain area.
"""

from services.mapping_service import (
    MappingService,
    build_mapping_table,
    get_mapping_service,
    SKU_MAP_BLOB_KEY,
)
from services.sync_service import InventorySyncService, get_sync_service
from services.upload_service import MappingUploadService, get_upload_service

__all__ = [
    "MappingService",
    "build_mapping_table",
    "get_mapping_service",
    "SKU_MAP_BLOB_KEY",
    "InventorySyncService",
    "get_sync_service",
    "MappingUploadService",
    "get_upload_service",
]
