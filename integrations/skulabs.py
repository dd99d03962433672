"""
SKU Labs integration.

Pushes on-hand quantities through the bulk upsert endpoint, one item per
call.
"""

from typing import Optional
from urllib.parse import urljoin
import requests
import structlog

from config.settings import Settings, get_settings
from exceptions import SkuLabsError
from models.sync import UpsertItem

logger = structlog.get_logger(__name__)

BULK_UPSERT_PATH = "/item/bulk_upsert"


class SkuLabsClient:
    """Write-only SKU Labs API client."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def bulk_upsert_single(self, item: UpsertItem) -> None:
        """
        Create or update one stock record.

        Args:
            item: SKU, warehouse, location and on-hand quantity

        Raises:
            ConfigurationError: If the API token is not set
            SkuLabsError: If the call fails or returns a non-success status
        """
        self.settings.require("skulabs_api_token")

        url = urljoin(self.settings.skulabs_base_url, BULK_UPSERT_PATH)
        payload = {"items": [item.model_dump()]}

        logger.info(
            "skulabs_upsert",
            sku=item.sku,
            warehouse=item.warehouse,
            location=item.location,
            on_hand=item.on_hand
        )

        try:
            response = requests.put(
                url,
                json=payload,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.settings.skulabs_api_token}",
                },
                timeout=self.settings.http_timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            logger.error("skulabs_request_failed", sku=item.sku, error=str(e))
            raise SkuLabsError(f"Failed to reach SKU Labs: {str(e)}")

        if not response.ok:
            raise SkuLabsError(
                f"[SKU Labs bulk_upsert] {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text
            )

        logger.info("skulabs_upsert_completed", sku=item.sku, status=response.status_code)
