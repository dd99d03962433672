"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from unittest.mock import MagicMock

from config.settings import Settings
from integrations.shopify import ShopifyClient
from integrations.skulabs import SkuLabsClient
from models.mapping import LocationEntry, MappingTable
from models.sync import VariantInfo
from services.mapping_service import MappingService, SKU_MAP_BLOB_KEY
from services.sync_service import InventorySyncService
from tests.factories import ADMIN_SECRET, WEBHOOK_SECRET, FakeBlobStore


# ===================
# FIXTURES
# ===================

@pytest.fixture
def app_settings() -> Settings:
    """Fully configured settings, isolated from any .env file."""
    return Settings(
        _env_file=None,
        shopify_webhook_secret=WEBHOOK_SECRET,
        shopify_store_domain="test-shop.myshopify.com",
        shopify_admin_token="shpat_test",
        skulabs_api_token="skulabs-test-token",
        skulabs_base_url="https://api.skulabs.test",
        admin_upload_secret=ADMIN_SECRET,
        netlify_site_id="site-123",
        netlify_blobs_token="blobs-test-token",
        netlify_api_url="https://api.netlify.test",
    )


@pytest.fixture
def fake_store() -> FakeBlobStore:
    """Empty in-memory blob store."""
    return FakeBlobStore()


@pytest.fixture
def sample_table() -> MappingTable:
    """Mapping table with one SKU stocked in Jeddah."""
    return MappingTable({
        "ABC": {
            "Jeddah Club": LocationEntry(warehouse="W1", location="L1"),
        },
    })


@pytest.fixture
def stored_table_store(sample_table) -> FakeBlobStore:
    """Blob store already holding sample_table."""
    return FakeBlobStore({SKU_MAP_BLOB_KEY: sample_table.model_dump_json()})


@pytest.fixture
def mock_shopify() -> MagicMock:
    """Shopify client returning SKU ABC in Jeddah."""
    client = MagicMock(spec=ShopifyClient)
    client.lookup_variant_by_inventory_item_id.return_value = VariantInfo(
        sku="ABC", warehouse_key="Jeddah"
    )
    return client


@pytest.fixture
def mock_skulabs() -> MagicMock:
    """SKU Labs client that accepts every upsert."""
    return MagicMock(spec=SkuLabsClient)


@pytest.fixture
def sync_service(app_settings, mock_shopify, mock_skulabs, stored_table_store) -> InventorySyncService:
    """Sync service wired to mocks and a stored sample table."""
    return InventorySyncService(
        settings=app_settings,
        shopify=mock_shopify,
        skulabs=mock_skulabs,
        mapping_service=MappingService(stored_table_store),
    )


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/health")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
