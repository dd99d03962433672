"""
Shopify Admin API integration.

Resolves an inventory item ID to the SKU and warehouse label of the variant
that owns it.
"""

from typing import Optional
import requests
import structlog

from config.settings import Settings, get_settings
from config.warehouses import DEFAULT_WAREHOUSE_KEY
from exceptions import ShopifyError
from models.sync import VariantInfo

logger = structlog.get_logger(__name__)


class ShopifyClient:
    """Read-only Shopify Admin REST client."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    def configured(self) -> bool:
        return self.settings.shopify_configured

    def _variants_url(self) -> str:
        return (
            f"https://{self.settings.shopify_store_domain}"
            f"/admin/api/{self.settings.shopify_api_version}/variants.json"
        )

    def lookup_variant_by_inventory_item_id(self, inventory_item_id: str) -> Optional[VariantInfo]:
        """
        Find the variant owning an inventory item.

        The warehouse label is the variant title, falling back to option1,
        then to "Default".

        Args:
            inventory_item_id: Shopify inventory item ID

        Returns:
            VariantInfo, or None if Shopify is not configured, the call is
            rejected, no variant matches, or the variant has no SKU

        Raises:
            ShopifyError: If Shopify cannot be reached
        """
        if not self.configured:
            logger.warning(
                "shopify_not_configured",
                has_domain=bool(self.settings.shopify_store_domain),
                has_token=bool(self.settings.shopify_admin_token)
            )
            return None

        try:
            response = requests.get(
                self._variants_url(),
                params={"inventory_item_ids": inventory_item_id},
                headers={
                    "X-Shopify-Access-Token": self.settings.shopify_admin_token,
                    "Content-Type": "application/json",
                },
                timeout=self.settings.http_timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            logger.error("shopify_request_failed", inventory_item_id=inventory_item_id, error=str(e))
            raise ShopifyError(
                f"Failed to reach Shopify: {str(e)}",
                details={"inventory_item_id": inventory_item_id}
            )

        if not response.ok:
            logger.error(
                "variant_lookup_failed",
                inventory_item_id=inventory_item_id,
                status=response.status_code,
                body=response.text
            )
            return None

        variants = response.json().get("variants") or []
        if not variants:
            logger.info("variant_not_found", inventory_item_id=inventory_item_id)
            return None

        variant = variants[0]
        sku = (variant.get("sku") or "").strip()
        if not sku:
            logger.info(
                "variant_has_no_sku",
                inventory_item_id=inventory_item_id,
                variant_id=variant.get("id")
            )
            return None

        warehouse_key = (
            (variant.get("title") or "").strip()
            or (variant.get("option1") or "").strip()
            or DEFAULT_WAREHOUSE_KEY
        )

        return VariantInfo(sku=sku, warehouse_key=warehouse_key)
