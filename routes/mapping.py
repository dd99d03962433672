"""
SKU mapping upload routes.

The admin posts the mapping CSV as the raw request body with the shared
secret in X-Admin-Secret.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse
import structlog

from exceptions import AppError
from services.upload_service import get_upload_service

logger = structlog.get_logger(__name__)

router = APIRouter()

ADMIN_SECRET_HEADER = "X-Admin-Secret"


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> PlainTextResponse:
    """Convert exception to a plain-text response."""
    if isinstance(e, AppError):
        if e.status_code >= 500:
            logger.error("mapping_upload_failed", code=e.code, error=e.message, details=e.details)
            # Configuration errors name the missing setting; other failures stay opaque
            message = e.message if e.code == "CONFIGURATION_ERROR" else "Upload error"
            return PlainTextResponse(message, status_code=500)
        return PlainTextResponse(e.message, status_code=e.status_code)

    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return PlainTextResponse("Upload error", status_code=500)


# ===================
# ROUTES
# ===================

@router.post("/upload")
async def upload_mapping(request: Request):
    """
    Replace the SKU mapping table with an uploaded CSV.

    Returns:
        200: {"ok": true, "skuCount": n}
        400: Empty body or unparseable CSV
        401: Missing or wrong admin secret
        405: Method other than POST
        500: Admin secret not configured, or storage failure
    """
    try:
        body = await request.body()
        service = get_upload_service()
        result = service.upload(body, request.headers.get(ADMIN_SECRET_HEADER))
        return JSONResponse(status_code=200, content=result.model_dump(by_alias=True))

    except Exception as e:
        return handle_error(e)
