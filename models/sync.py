"""
Inventory sync schemas.

Covers the Shopify webhook payload, the variant lookup result, the SKU Labs
upsert item and the outcome of one webhook delivery.
"""

from enum import Enum
from typing import Any, Union

from pydantic import ConfigDict, Field, field_validator

from config.warehouses import DEFAULT_WAREHOUSE_KEY
from models.base import BaseSchema


class InventoryLevelPayload(BaseSchema):
    """
    Body of an inventory_levels/update webhook.

    Only the fields needed for the sync are validated; the rest are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    inventory_item_id: str = Field(..., min_length=1, description="Shopify inventory item ID")
    available: float = Field(..., allow_inf_nan=False, description="Available quantity")

    @field_validator("inventory_item_id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Any:
        """Shopify sends numeric IDs; the lookup uses them as strings."""
        if isinstance(v, bool):
            raise ValueError("inventory_item_id must be a string or integer")
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("available", mode="before")
    @classmethod
    def reject_bool(cls, v: Any) -> Any:
        """Booleans are not quantities."""
        if isinstance(v, bool):
            raise ValueError("available must be a number")
        return v


class VariantInfo(BaseSchema):
    """SKU and warehouse label resolved from a Shopify variant."""

    sku: str = Field(..., min_length=1)
    warehouse_key: str = Field(default=DEFAULT_WAREHOUSE_KEY, min_length=1)


class UpsertItem(BaseSchema):
    """Single stock record pushed to SKU Labs."""

    sku: str = Field(..., min_length=1)
    warehouse: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    on_hand: Union[int, float]

    @field_validator("on_hand")
    @classmethod
    def integral_quantity(cls, v: Union[int, float]) -> Union[int, float]:
        """Send whole quantities as JSON integers."""
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v


class SyncOutcome(str, Enum):
    """How a webhook delivery ended."""
    OK = "ok"
    IGNORED = "ignored"
    SKIPPED = "skipped"
    ERROR = "error"


class SyncResult(BaseSchema):
    """
    Result of processing one webhook delivery.

    The message is returned to Shopify as the plain-text response body.
    """

    outcome: SyncOutcome
    message: str

    @classmethod
    def ok(cls) -> "SyncResult":
        return cls(outcome=SyncOutcome.OK, message="OK")

    @classmethod
    def ignored(cls, message: str = "Ignored topic") -> "SyncResult":
        return cls(outcome=SyncOutcome.IGNORED, message=message)

    @classmethod
    def skipped(cls, message: str) -> "SyncResult":
        return cls(outcome=SyncOutcome.SKIPPED, message=message)

    @classmethod
    def handled_error(cls, message: str) -> "SyncResult":
        return cls(outcome=SyncOutcome.ERROR, message=message)
