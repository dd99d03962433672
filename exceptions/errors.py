"""
Custom exception classes for the application.

Every error carries a code, a human-readable message and the HTTP status
it maps to when it reaches an API boundary.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "SKULABS_ERROR")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class UnauthorizedError(AppError):
    """Caller failed authentication (401)."""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(
            code=code,
            message=message,
            status_code=401
        )


class ConfigurationError(AppError):
    """Required server-side setting is missing (500)."""

    def __init__(self, missing: list[str]):
        names = ", ".join(name.upper() for name in missing)
        super().__init__(
            code="CONFIGURATION_ERROR",
            message=f"{names} not configured",
            status_code=500,
            details={"missing": [name.upper() for name in missing]}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None,
        status_code: int = 422
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=status_code,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


# ===================
# MAPPING CSV ERRORS
# ===================

class MappingParseError(ValidationError):
    """Mapping CSV could not be parsed (400)."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="MAPPING_PARSE_ERROR",
            message=message,
            details=details,
            status_code=400
        )


class MappingMissingColumnsError(MappingParseError):
    """Mapping CSV header lacks required columns (400)."""

    def __init__(self, missing: list[str], found: list[str]):
        super().__init__(
            message=(
                "CSV must have columns named 'SKU', 'Warehouse', and 'Location' "
                f"(case-insensitive); missing: {', '.join(missing)}"
            ),
            details={"missing_columns": missing, "found_columns": found}
        )
        self.code = "MAPPING_MISSING_COLUMNS"


class MappingTableCorruptError(AppError):
    """Stored mapping table does not match the expected schema (500)."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            code="MAPPING_TABLE_CORRUPT",
            message=f"Stored mapping table '{key}' is invalid",
            status_code=500,
            details={"key": key, "reason": reason}
        )


# ===================
# INTEGRATION ERRORS
# ===================

class ShopifyError(ExternalServiceError):
    """Shopify Admin API could not be reached."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(service="shopify", message=message, details=details)


class SkuLabsError(ExternalServiceError):
    """SKU Labs API call failed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None
    ):
        super().__init__(
            service="skulabs",
            message=message,
            details={"response_status": status_code, "response_body": body}
        )
        self.response_status = status_code
        self.response_body = body


class BlobStoreError(ExternalServiceError):
    """Netlify Blobs API call failed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None
    ):
        super().__init__(
            service="netlify_blobs",
            message=message,
            details={"response_status": status_code, "response_body": body}
        )
        self.response_status = status_code
        self.response_body = body
