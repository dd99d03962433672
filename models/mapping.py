"""
SKU mapping table schemas.

The table is persisted as JSON with the shape
    {"<SKU>": {"<SKU Labs warehouse>": {"warehouse": "...", "location": "..."}}}
"""

from typing import Optional

from pydantic import ConfigDict, Field, RootModel, field_validator

from models.base import BaseSchema
from utils.text_utils import normalize_sku


class LocationEntry(BaseSchema):
    """SKU Labs warehouse + location pair that receives a stock update."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        frozen=True
    )

    warehouse: str = Field(..., min_length=1, description="SKU Labs warehouse")
    location: str = Field(..., min_length=1, description="SKU Labs location within the warehouse")


class MappingTable(RootModel[dict[str, dict[str, LocationEntry]]]):
    """
    SKU -> warehouse name -> LocationEntry.

    SKU keys are normalized with normalize_sku. Warehouse names are matched
    exactly. Only the first entry for a SKU + warehouse pair is kept.
    """

    root: dict[str, dict[str, LocationEntry]] = Field(default_factory=dict)

    @field_validator("root")
    @classmethod
    def normalize_sku_keys(
        cls, v: dict[str, dict[str, LocationEntry]]
    ) -> dict[str, dict[str, LocationEntry]]:
        """Re-key SKUs so stored tables written with mixed case still match."""
        normalized: dict[str, dict[str, LocationEntry]] = {}
        for sku, warehouses in v.items():
            key = normalize_sku(sku)
            if not key:
                continue
            target = normalized.setdefault(key, {})
            for warehouse_name, entry in warehouses.items():
                target.setdefault(warehouse_name.strip(), entry)
        return normalized

    def add(self, sku: str, warehouse_name: str, entry: LocationEntry) -> bool:
        """
        Add an entry unless the SKU + warehouse pair already has one.

        Returns:
            True if the entry was stored
        """
        warehouses = self.root.setdefault(normalize_sku(sku), {})
        if warehouse_name in warehouses:
            return False
        warehouses[warehouse_name] = entry
        return True

    def get_sku_entry(self, sku: str) -> Optional[dict[str, LocationEntry]]:
        """Get all warehouse entries for a SKU."""
        return self.root.get(normalize_sku(sku))

    def get_location(self, sku: str, warehouse_name: str) -> Optional[LocationEntry]:
        """Get the location entry for a SKU in a SKU Labs warehouse."""
        warehouses = self.get_sku_entry(sku)
        if warehouses is None:
            return None
        return warehouses.get(warehouse_name)

    @property
    def sku_count(self) -> int:
        """Number of distinct SKUs."""
        return len(self.root)

    @property
    def entry_count(self) -> int:
        """Number of SKU + warehouse entries."""
        return sum(len(warehouses) for warehouses in self.root.values())


class MappingUploadResponse(BaseSchema):
    """Response for a successful mapping upload."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    sku_count: int = Field(..., ge=0, serialization_alias="skuCount")
