"""
SKU mapping table service.

Builds the mapping table from parsed CSV rows and persists it as a single
JSON blob. Uploads replace the stored table wholesale.
"""

from typing import Iterable, Optional
import structlog
from pydantic import ValidationError as PydanticValidationError

from integrations.netlify_blobs import BlobStore
from models.mapping import LocationEntry, MappingTable
from parsers.mapping_csv_parser import MappingRow
from exceptions import MappingTableCorruptError

logger = structlog.get_logger(__name__)

SKU_MAP_BLOB_KEY = "sku-warehouse-location-map.json"


def build_mapping_table(rows: Iterable[MappingRow]) -> MappingTable:
    """
    Fold parsed rows into a mapping table.

    The first row for a SKU + warehouse pair wins; later duplicates are
    ignored.
    """
    table = MappingTable()
    duplicates = 0

    for row in rows:
        entry = LocationEntry(warehouse=row.warehouse, location=row.location)
        if not table.add(row.sku, row.warehouse, entry):
            duplicates += 1

    if duplicates:
        logger.info("mapping_duplicates_ignored", duplicates=duplicates)

    return table


class MappingService:
    """
    Load and save the SKU mapping table.

    Nothing is cached between calls; every load reads the store.
    """

    def __init__(self, store: Optional[BlobStore] = None, key: str = SKU_MAP_BLOB_KEY):
        self.store = store or BlobStore()
        self.key = key

    def load(self) -> Optional[MappingTable]:
        """
        Read the stored mapping table.

        Returns:
            MappingTable, or None if nothing has been uploaded yet

        Raises:
            MappingTableCorruptError: If the stored JSON does not match the schema
            BlobStoreError: If the store cannot be read
        """
        raw = self.store.get(self.key)
        if not raw:
            return None

        try:
            table = MappingTable.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.error("mapping_table_invalid", key=self.key, errors=e.error_count())
            raise MappingTableCorruptError(self.key, str(e))

        logger.debug("mapping_table_loaded", key=self.key, sku_count=table.sku_count)
        return table

    def save(self, table: MappingTable) -> None:
        """
        Replace the stored mapping table.

        Raises:
            BlobStoreError: If the store cannot be written
        """
        self.store.set(self.key, table.model_dump_json())
        logger.info(
            "mapping_table_saved",
            key=self.key,
            sku_count=table.sku_count,
            entry_count=table.entry_count
        )


def get_mapping_service() -> MappingService:
    """Create a MappingService bound to the configured blob store."""
    return MappingService()
