"""
External service integrations.
"""

from integrations.netlify_blobs import BlobStore
from integrations.shopify import ShopifyClient
from integrations.skulabs import SkuLabsClient

__all__ = [
    "BlobStore",
    "ShopifyClient",
    "SkuLabsClient",
]
