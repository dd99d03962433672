"""
Text utilities for identifiers shared between Shopify, SKU Labs and the
mapping CSV.
"""

from typing import Optional

BOM = "\ufeff"


def normalize_sku(sku: Optional[str]) -> str:
    """
    Normalize a SKU for use as a mapping table key.

    Both the CSV ingestion and the webhook lookup go through this, so the
    join is case-insensitive:
    - "  abc-123 " -> "ABC-123"
    - None -> ""

    Args:
        sku: Raw SKU (may have surrounding whitespace, mixed case)

    Returns:
        Trimmed, uppercased SKU; empty string if input is empty
    """
    if not sku:
        return ""
    return sku.strip().upper()


def strip_bom(text: str) -> str:
    """Remove a leading UTF-8 byte-order mark."""
    if text.startswith(BOM):
        return text[len(BOM):]
    return text


def normalize_header(name: str) -> str:
    """Normalize a CSV header cell for column matching."""
    return strip_bom(name).strip().lower()
