"""
Netlify Blobs integration.

Minimal get/set client for a site-scoped blob store, talking to the Netlify
REST API. Reads and writes go through a signed URL: the API call returns
{"url": ...} and the blob itself is fetched from or uploaded to that URL.
"""

from typing import Optional
from urllib.parse import quote
import requests
import structlog

from config.settings import Settings, get_settings
from exceptions import BlobStoreError

logger = structlog.get_logger(__name__)

SITE_STORE_PREFIX = "site:"
SIGNED_URL_ACCEPT = "application/json;type=signed-url"


class BlobStore:
    """
    Key-value text store backed by Netlify Blobs.

    Each set() replaces the stored value; there is no versioning.
    """

    def __init__(self, settings: Optional[Settings] = None, name: Optional[str] = None):
        self.settings = settings or get_settings()
        self.settings.require("netlify_site_id", "netlify_blobs_token")
        self.name = name or self.settings.blobs_store_name
        self.timeout = self.settings.http_timeout_seconds

    def _api_url(self, key: str) -> str:
        base = self.settings.netlify_api_url.rstrip("/")
        site_id = quote(self.settings.netlify_site_id, safe="")
        store = quote(SITE_STORE_PREFIX + self.name, safe=":")
        return f"{base}/api/v1/blobs/{site_id}/{store}/{quote(key, safe='')}"

    def _signed_url(self, method: str, key: str) -> Optional[str]:
        """
        Ask the API for a signed URL for one blob operation.

        Returns:
            Signed URL, or None if the API reports the blob missing
        """
        response = requests.request(
            method,
            self._api_url(key),
            headers={
                "Authorization": f"Bearer {self.settings.netlify_blobs_token}",
                "Accept": SIGNED_URL_ACCEPT,
            },
            timeout=self.timeout,
        )

        if response.status_code == 404:
            return None
        if not response.ok:
            logger.error(
                "blob_signed_url_failed",
                store=self.name,
                key=key,
                method=method,
                status=response.status_code,
                body=response.text,
            )
            raise BlobStoreError(
                f"Netlify Blobs {method} {key} failed",
                status_code=response.status_code,
                body=response.text,
            )

        return response.json()["url"]

    def get(self, key: str) -> Optional[str]:
        """
        Read a blob as text.

        Returns:
            Blob content, or None if the key does not exist

        Raises:
            BlobStoreError: If the API call fails
        """
        logger.debug("blob_get", store=self.name, key=key)

        try:
            signed_url = self._signed_url("GET", key)
            if signed_url is None:
                return None

            response = requests.get(signed_url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("blob_request_failed", store=self.name, key=key, error=str(e))
            raise BlobStoreError(f"Netlify Blobs GET {key} failed: {str(e)}")

        if response.status_code == 404:
            return None
        if not response.ok:
            raise BlobStoreError(
                f"Netlify Blobs GET {key} failed",
                status_code=response.status_code,
                body=response.text,
            )

        response.encoding = "utf-8"
        return response.text

    def set(self, key: str, value: str) -> None:
        """
        Write a blob, replacing any previous value.

        Raises:
            BlobStoreError: If the API call fails
        """
        logger.debug("blob_set", store=self.name, key=key, size=len(value))

        try:
            signed_url = self._signed_url("PUT", key)
            if signed_url is None:
                raise BlobStoreError(f"Netlify Blobs PUT {key} failed", status_code=404)

            response = requests.put(
                signed_url,
                data=value.encode("utf-8"),
                headers={"Cache-Control": "max-age=0, stale-while-revalidate=60"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error("blob_request_failed", store=self.name, key=key, error=str(e))
            raise BlobStoreError(f"Netlify Blobs PUT {key} failed: {str(e)}")

        if not response.ok:
            raise BlobStoreError(
                f"Netlify Blobs PUT {key} failed",
                status_code=response.status_code,
                body=response.text,
            )

        logger.info("blob_written", store=self.name, key=key)
