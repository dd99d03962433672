"""
Mapping upload service.

Authenticates an admin upload, parses the CSV, builds the mapping table and
replaces the stored copy.
"""

from typing import Optional, Union
import hmac
import structlog

from config.settings import Settings, get_settings
from exceptions import MappingParseError, UnauthorizedError, ValidationError
from integrations.netlify_blobs import BlobStore
from models.mapping import MappingUploadResponse
from parsers.mapping_csv_parser import parse_mapping_csv
from services.mapping_service import MappingService, build_mapping_table

logger = structlog.get_logger(__name__)


class MappingUploadService:
    """Admin upload of the SKU -> warehouse -> location table."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        mapping_service: Optional[MappingService] = None,
    ):
        self.settings = settings or get_settings()
        self._mapping_service = mapping_service

    @property
    def mapping_service(self) -> MappingService:
        if self._mapping_service is None:
            self._mapping_service = MappingService(BlobStore(self.settings))
        return self._mapping_service

    def authenticate(self, provided_secret: Optional[str]) -> None:
        """
        Check the caller's admin secret.

        Raises:
            ConfigurationError: If ADMIN_UPLOAD_SECRET is not set
            UnauthorizedError: If the provided secret is missing or wrong
        """
        self.settings.require("admin_upload_secret")

        expected = self.settings.admin_upload_secret.encode("utf-8")
        provided = (provided_secret or "").encode("utf-8")
        if not provided_secret or not hmac.compare_digest(expected, provided):
            logger.warning("mapping_upload_unauthorized", has_secret=bool(provided_secret))
            raise UnauthorizedError()

    def upload(self, body: Union[str, bytes], provided_secret: Optional[str]) -> MappingUploadResponse:
        """
        Replace the stored mapping table with the contents of a CSV upload.

        Args:
            body: CSV text or raw bytes
            provided_secret: X-Admin-Secret header value

        Returns:
            MappingUploadResponse with the number of distinct SKUs written

        Raises:
            ConfigurationError: If ADMIN_UPLOAD_SECRET is not set
            UnauthorizedError: If the caller's secret does not match
            ValidationError: If the body is empty
            MappingParseError: If the CSV cannot be parsed
            BlobStoreError: If the table cannot be stored
        """
        self.authenticate(provided_secret)

        text = body
        if isinstance(body, bytes):
            try:
                text = body.decode("utf-8-sig")
            except UnicodeDecodeError:
                raise MappingParseError("CSV must be UTF-8 encoded")

        if not text.strip():
            raise ValidationError("Empty body", code="EMPTY_BODY", status_code=400)

        logger.info("mapping_upload_started", size=len(text))

        result = parse_mapping_csv(text)
        table = build_mapping_table(result.rows)
        self.mapping_service.save(table)

        logger.info(
            "mapping_upload_completed",
            sku_count=table.sku_count,
            entry_count=table.entry_count,
            rows=len(result.rows),
            skipped_rows=result.skipped_rows
        )

        return MappingUploadResponse(ok=True, sku_count=table.sku_count)


def get_upload_service() -> MappingUploadService:
    """Create a MappingUploadService from application settings."""
    return MappingUploadService()
