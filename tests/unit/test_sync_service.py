"""
Unit tests for the inventory sync service.

Covers every short-circuit of the webhook pipeline and the happy path.
"""

from unittest.mock import patch
import pytest

from config.warehouses import normalize_warehouse_name, WAREHOUSE_NAME_MAP
from exceptions import ShopifyError, SkuLabsError, UnauthorizedError
from models.sync import SyncOutcome, UpsertItem, VariantInfo
from services.mapping_service import MappingService
from services.sync_service import InventorySyncService
from tests.factories import FakeBlobStore, WebhookFactory, sign

TOPIC = "inventory_levels/update"


def deliver(service, **overrides):
    body, headers = WebhookFactory.create(**overrides)
    return service.process_webhook(body, headers["X-Shopify-Hmac-Sha256"], headers["X-Shopify-Topic"])


# ===================
# HAPPY PATH
# ===================

class TestSync:
    """Tests for a fully resolvable event."""

    def test_pushes_mapped_location(self, sync_service, mock_shopify, mock_skulabs):
        """Event for item 123 lands on W1/L1 with the available quantity."""
        result = deliver(sync_service, inventory_item_id="123", available=5)

        assert result.outcome == SyncOutcome.OK
        assert result.message == "OK"
        mock_shopify.lookup_variant_by_inventory_item_id.assert_called_once_with("123")
        mock_skulabs.bulk_upsert_single.assert_called_once_with(
            UpsertItem(sku="ABC", warehouse="W1", location="L1", on_hand=5)
        )

    def test_numeric_item_id_stringified(self, sync_service, mock_shopify):
        deliver(sync_service, inventory_item_id=808950810)
        mock_shopify.lookup_variant_by_inventory_item_id.assert_called_once_with("808950810")

    def test_zero_available_pushed(self, sync_service, mock_skulabs):
        """Zero is a real quantity, not a missing one."""
        deliver(sync_service, available=0)
        assert mock_skulabs.bulk_upsert_single.call_args[0][0].on_hand == 0

    def test_negative_available_pushed(self, sync_service, mock_skulabs):
        deliver(sync_service, available=-3)
        assert mock_skulabs.bulk_upsert_single.call_args[0][0].on_hand == -3

    def test_upstream_sku_case_preserved(self, sync_service, mock_shopify, mock_skulabs):
        """Lookup ignores SKU case; the pushed SKU is Shopify's."""
        mock_shopify.lookup_variant_by_inventory_item_id.return_value = VariantInfo(
            sku="abc", warehouse_key="Jeddah"
        )

        result = deliver(sync_service)

        assert result.outcome == SyncOutcome.OK
        assert mock_skulabs.bulk_upsert_single.call_args[0][0].sku == "abc"


# ===================
# AUTH AND TOPIC
# ===================

class TestSignatureAndTopic:
    """Tests for the steps before the error boundary."""

    def test_bad_signature_raises(self, sync_service, mock_shopify, mock_skulabs):
        body = WebhookFactory.body()

        with pytest.raises(UnauthorizedError) as exc_info:
            sync_service.process_webhook(body, sign(body, "wrong-secret"), TOPIC)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Invalid HMAC"
        mock_shopify.lookup_variant_by_inventory_item_id.assert_not_called()

    def test_missing_signature_raises(self, sync_service):
        with pytest.raises(UnauthorizedError):
            sync_service.process_webhook(WebhookFactory.body(), None, TOPIC)

    def test_unset_secret_rejects(self, app_settings, mock_shopify, mock_skulabs):
        """Without a webhook secret nothing verifies."""
        settings = app_settings.model_copy(update={"shopify_webhook_secret": None})
        service = InventorySyncService(settings, mock_shopify, mock_skulabs, MappingService(FakeBlobStore()))

        with pytest.raises(UnauthorizedError):
            deliver(service)

    def test_signature_checked_before_parsing(self, sync_service):
        """Garbage bodies with a bad signature are 401, not skipped."""
        with pytest.raises(UnauthorizedError):
            sync_service.process_webhook(b"not json", "bogus", TOPIC)

    @pytest.mark.parametrize("topic", ["orders/create", "inventory_levels/connect", "", None])
    def test_other_topics_ignored(self, sync_service, mock_shopify, mock_skulabs, topic):
        body = WebhookFactory.body()

        result = sync_service.process_webhook(body, sign(body), topic)

        assert result.outcome == SyncOutcome.IGNORED
        assert result.message == "Ignored topic"
        mock_shopify.lookup_variant_by_inventory_item_id.assert_not_called()
        mock_skulabs.bulk_upsert_single.assert_not_called()


# ===================
# SKIPS
# ===================

class TestSkips:
    """Each unresolvable step ends with a skip and no push."""

    @pytest.mark.parametrize("body", [
        b'{"available": 5}',
        b'{"inventory_item_id": 123}',
        b'{"inventory_item_id": "", "available": 5}',
        b'{"inventory_item_id": null, "available": 5}',
        b'{"inventory_item_id": 123, "available": null}',
        b'{"inventory_item_id": 123, "available": "lots"}',
        b'{"inventory_item_id": 123, "available": true}',
        b'[1, 2]',
        b'not json',
    ])
    def test_missing_fields(self, sync_service, mock_shopify, mock_skulabs, body):
        result = sync_service.process_webhook(body, sign(body), TOPIC)

        assert result.outcome == SyncOutcome.SKIPPED
        assert result.message == "Missing fields; skipped"
        mock_shopify.lookup_variant_by_inventory_item_id.assert_not_called()
        mock_skulabs.bulk_upsert_single.assert_not_called()

    def test_no_variant(self, sync_service, mock_shopify, mock_skulabs):
        mock_shopify.lookup_variant_by_inventory_item_id.return_value = None

        result = deliver(sync_service)

        assert result.outcome == SyncOutcome.SKIPPED
        assert result.message == "No variant; skipped"
        mock_skulabs.bulk_upsert_single.assert_not_called()

    def test_no_mapping_table(self, app_settings, mock_shopify, mock_skulabs):
        service = InventorySyncService(app_settings, mock_shopify, mock_skulabs, MappingService(FakeBlobStore()))

        result = deliver(service)

        assert result.message == "No SKU map; skipped"
        mock_skulabs.bulk_upsert_single.assert_not_called()

    def test_no_sku_entry(self, sync_service, mock_shopify, mock_skulabs):
        mock_shopify.lookup_variant_by_inventory_item_id.return_value = VariantInfo(
            sku="UNMAPPED", warehouse_key="Jeddah"
        )

        result = deliver(sync_service)

        assert result.message == "No SKU entry; skipped"
        mock_skulabs.bulk_upsert_single.assert_not_called()

    def test_no_location_entry(self, sync_service, mock_shopify, mock_skulabs):
        """SKU is mapped, but not for the variant's warehouse."""
        mock_shopify.lookup_variant_by_inventory_item_id.return_value = VariantInfo(
            sku="ABC", warehouse_key="Riyadh"
        )

        with patch("services.sync_service.logger") as mock_logger:
            result = deliver(sync_service)

        assert result.message == "No location entry; skipped"
        mock_logger.warning.assert_called_once_with(
            "webhook_no_location_entry",
            sku="ABC",
            warehouse_key="Riyadh",
            warehouse_name="Riyadh Club"
        )
        mock_skulabs.bulk_upsert_single.assert_not_called()


# ===================
# HANDLED ERRORS
# ===================

class TestHandledErrors:
    """Failures after the topic filter are acknowledged, not raised."""

    def test_skulabs_failure_acknowledged(self, sync_service, mock_skulabs):
        mock_skulabs.bulk_upsert_single.side_effect = SkuLabsError("[SKU Labs bulk_upsert] 500: boom", 500, "boom")

        with patch("utils.error_boundary.logger") as mock_logger:
            result = deliver(sync_service)

        assert result.outcome == SyncOutcome.ERROR
        assert result.message == "Handled error"
        mock_logger.error.assert_called_once()
        args, kwargs = mock_logger.error.call_args
        assert args == ("webhook_handled_error",)
        assert kwargs["error_code"] == "SKULABS_ERROR"
        assert kwargs["details"]["response_status"] == 500

    def test_shopify_unreachable_acknowledged(self, sync_service, mock_shopify, mock_skulabs):
        mock_shopify.lookup_variant_by_inventory_item_id.side_effect = ShopifyError("down")

        result = deliver(sync_service)

        assert result.message == "Handled error"
        mock_skulabs.bulk_upsert_single.assert_not_called()

    def test_unexpected_exception_acknowledged(self, sync_service, mock_shopify):
        mock_shopify.lookup_variant_by_inventory_item_id.side_effect = KeyError("variants")

        with patch("utils.error_boundary.logger") as mock_logger:
            result = deliver(sync_service)

        assert result.outcome == SyncOutcome.ERROR
        kwargs = mock_logger.exception.call_args.kwargs
        assert kwargs["error_type"] == "KeyError"
        assert kwargs["operation"] == "sync_inventory_level"

    def test_blob_store_unconfigured_acknowledged(self, app_settings, mock_shopify, mock_skulabs):
        """Missing blob settings surface as a handled error."""
        settings = app_settings.model_copy(update={"netlify_site_id": None})
        service = InventorySyncService(settings, mock_shopify, mock_skulabs)

        result = deliver(service)

        assert result.outcome == SyncOutcome.ERROR
        mock_skulabs.bulk_upsert_single.assert_not_called()


# ===================
# WAREHOUSE NAMES
# ===================

class TestWarehouseNames:
    """Tests for the Shopify -> SKU Labs warehouse name map."""

    @pytest.mark.parametrize("key, expected", [
        ("Jeddah", "Jeddah Club"),
        ("Riyadh", "Riyadh Club"),
        ("Dammam", "Dammam Club"),
    ])
    def test_known_names(self, key, expected):
        assert normalize_warehouse_name(key) == expected

    @pytest.mark.parametrize("key", ["Default", "Mecca", "jeddah", "Jeddah Club"])
    def test_unknown_names_pass_through(self, key):
        assert normalize_warehouse_name(key) == key

    def test_map_extension(self, monkeypatch):
        """New warehouses only need a map entry."""
        monkeypatch.setitem(WAREHOUSE_NAME_MAP, "Khobar", "Khobar Club")
        assert normalize_warehouse_name("Khobar") == "Khobar Club"
