"""
Webhook signature verification.

Shopify signs each webhook with base64(HMAC-SHA256(secret, raw_body)) and
sends it in the X-Shopify-Hmac-Sha256 header. The digest must be computed
over the body exactly as received, before any JSON parsing.
"""

import base64
import hashlib
import hmac
from typing import Optional, Union

import structlog

logger = structlog.get_logger(__name__)


def compute_signature(raw_body: Union[bytes, str], secret: str) -> str:
    """
    Compute the base64-encoded HMAC-SHA256 signature of a body.

    Args:
        raw_body: Request body as received (str is encoded as UTF-8)
        secret: Shared webhook secret

    Returns:
        Base64 digest string
    """
    if isinstance(raw_body, str):
        raw_body = raw_body.encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_webhook_signature(
    raw_body: Union[bytes, str],
    signature: Optional[str],
    secret: Optional[str],
) -> bool:
    """
    Check a claimed webhook signature in constant time.

    Never raises. Returns False when the secret is unset, the signature is
    missing, or the digests differ in length or content.

    Args:
        raw_body: Untouched request body
        signature: Value of the signature header
        secret: Shared webhook secret

    Returns:
        True if the signature matches
    """
    if not secret:
        logger.warning("webhook_secret_not_configured")
        return False
    if not signature:
        return False

    expected = compute_signature(raw_body, secret).encode("ascii")
    claimed = signature.encode("utf-8")

    if len(expected) != len(claimed):
        return False
    return hmac.compare_digest(expected, claimed)
