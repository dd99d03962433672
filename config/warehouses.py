"""
Warehouse name configuration.

Shopify variants carry a short warehouse label (the variant title, e.g.
"Jeddah"). SKU Labs names the same warehouses differently, and the mapping
table is keyed by the SKU Labs name.
"""

# Shopify warehouse label -> SKU Labs warehouse name
WAREHOUSE_NAME_MAP: dict[str, str] = {
    "Jeddah": "Jeddah Club",
    "Riyadh": "Riyadh Club",
    "Dammam": "Dammam Club",
}

# Label used when a variant has neither a title nor an option1 value
DEFAULT_WAREHOUSE_KEY = "Default"


def normalize_warehouse_name(warehouse_key: str) -> str:
    """
    Translate a Shopify warehouse label to the SKU Labs warehouse name.

    Unknown labels pass through unchanged.
    """
    return WAREHOUSE_NAME_MAP.get(warehouse_key, warehouse_key)
