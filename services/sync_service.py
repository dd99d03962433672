"""
Inventory sync service.

Processes one Shopify inventory_levels/update webhook:

    verify signature -> filter topic -> extract fields -> resolve variant
    -> load mapping -> resolve SKU -> resolve warehouse -> resolve location
    -> push to SKU Labs

Any step after the topic filter may end the delivery with a "skipped"
result. Skips are expected outcomes and are logged, not raised, so Shopify
sees a 200 and does not redeliver.
"""

from typing import Optional, Union
import structlog
from pydantic import ValidationError as PydanticValidationError

from config.settings import Settings, get_settings
from config.warehouses import normalize_warehouse_name
from exceptions import UnauthorizedError
from integrations.netlify_blobs import BlobStore
from integrations.shopify import ShopifyClient
from integrations.skulabs import SkuLabsClient
from models.sync import InventoryLevelPayload, SyncResult, UpsertItem
from services.mapping_service import MappingService
from utils.error_boundary import report_and_acknowledge
from utils.signature import verify_webhook_signature

logger = structlog.get_logger(__name__)

INVENTORY_LEVELS_UPDATE_TOPIC = "inventory_levels/update"


class InventorySyncService:
    """
    Shopify -> SKU Labs inventory sync.

    Collaborators are injectable for tests; by default they are built from
    the application settings.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        shopify: Optional[ShopifyClient] = None,
        skulabs: Optional[SkuLabsClient] = None,
        mapping_service: Optional[MappingService] = None,
    ):
        self.settings = settings or get_settings()
        self.shopify = shopify or ShopifyClient(self.settings)
        self.skulabs = skulabs or SkuLabsClient(self.settings)
        self._mapping_service = mapping_service

    @property
    def mapping_service(self) -> MappingService:
        """Mapping service, created on first use."""
        if self._mapping_service is None:
            self._mapping_service = MappingService(BlobStore(self.settings))
        return self._mapping_service

    # ===================
    # ENTRY POINT
    # ===================

    def process_webhook(
        self,
        raw_body: Union[bytes, str],
        signature: Optional[str],
        topic: Optional[str],
    ) -> SyncResult:
        """
        Handle one webhook delivery.

        Args:
            raw_body: Request body exactly as received
            signature: X-Shopify-Hmac-Sha256 header value
            topic: X-Shopify-Topic header value

        Returns:
            SyncResult describing how the delivery ended

        Raises:
            UnauthorizedError: If the signature does not verify
        """
        if not verify_webhook_signature(raw_body, signature, self.settings.shopify_webhook_secret):
            logger.warning("webhook_signature_invalid", has_signature=bool(signature))
            raise UnauthorizedError("Invalid HMAC", code="INVALID_HMAC")

        if topic != INVENTORY_LEVELS_UPDATE_TOPIC:
            logger.info("webhook_topic_ignored", topic=topic)
            return SyncResult.ignored()

        return self.sync_inventory_level(raw_body)

    # ===================
    # SYNC PIPELINE
    # ===================

    @report_and_acknowledge(SyncResult.handled_error)
    def sync_inventory_level(self, raw_body: Union[bytes, str]) -> SyncResult:
        """
        Push one verified inventory level update to SKU Labs.

        Unexpected failures (Shopify unreachable, blob store or SKU Labs
        errors) are logged and acknowledged by the error boundary.
        """
        try:
            payload = InventoryLevelPayload.model_validate_json(raw_body)
        except PydanticValidationError as e:
            logger.warning(
                "webhook_missing_fields",
                errors=[".".join(str(p) for p in err["loc"]) or err["type"] for err in e.errors()]
            )
            return SyncResult.skipped("Missing fields; skipped")

        inventory_item_id = payload.inventory_item_id

        # 1) Variant info from Shopify
        variant = self.shopify.lookup_variant_by_inventory_item_id(inventory_item_id)
        if variant is None:
            logger.warning("webhook_no_variant", inventory_item_id=inventory_item_id)
            return SyncResult.skipped("No variant; skipped")

        # 2) Mapping table
        table = self.mapping_service.load()
        if table is None:
            logger.warning("sku_map_not_found")
            return SyncResult.skipped("No SKU map; skipped")

        sku_entry = table.get_sku_entry(variant.sku)
        if sku_entry is None:
            logger.warning("webhook_no_sku_entry", sku=variant.sku)
            return SyncResult.skipped("No SKU entry; skipped")

        # 3) Shopify warehouse label -> SKU Labs warehouse -> location
        warehouse_name = normalize_warehouse_name(variant.warehouse_key)
        entry = sku_entry.get(warehouse_name)
        if entry is None:
            logger.warning(
                "webhook_no_location_entry",
                sku=variant.sku,
                warehouse_key=variant.warehouse_key,
                warehouse_name=warehouse_name
            )
            return SyncResult.skipped("No location entry; skipped")

        self.skulabs.bulk_upsert_single(
            UpsertItem(
                sku=variant.sku,
                warehouse=entry.warehouse,
                location=entry.location,
                on_hand=payload.available,
            )
        )

        logger.info(
            "inventory_synced",
            inventory_item_id=inventory_item_id,
            sku=variant.sku,
            warehouse=entry.warehouse,
            location=entry.location,
            on_hand=payload.available
        )
        return SyncResult.ok()


def get_sync_service() -> InventorySyncService:
    """Create an InventorySyncService from application settings."""
    return InventorySyncService()
