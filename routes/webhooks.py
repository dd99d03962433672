"""
Shopify webhook routes.

Responses are plain text. Every outcome other than a bad signature is a
200 so Shopify does not redeliver the event.
"""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
import structlog

from exceptions import UnauthorizedError
from services.sync_service import get_sync_service

logger = structlog.get_logger(__name__)

router = APIRouter()

SIGNATURE_HEADER = "X-Shopify-Hmac-Sha256"
TOPIC_HEADER = "X-Shopify-Topic"


@router.post("/shopify/inventory", response_class=PlainTextResponse)
async def shopify_inventory_webhook(request: Request):
    """
    Receive an inventory_levels/update webhook and push it to SKU Labs.

    Returns:
        200: OK, ignored, skipped or handled error (plain text)
        401: Invalid HMAC
    """
    # Signature covers the body exactly as sent
    raw_body = await request.body()
    signature = request.headers.get(SIGNATURE_HEADER)
    topic = request.headers.get(TOPIC_HEADER, "")

    logger.info("webhook_received", topic=topic, size=len(raw_body))

    try:
        result = get_sync_service().process_webhook(raw_body, signature, topic)
    except UnauthorizedError as e:
        return PlainTextResponse(e.message, status_code=e.status_code)

    logger.info("webhook_processed", outcome=result.outcome.value, message=result.message)
    return PlainTextResponse(result.message, status_code=200)
