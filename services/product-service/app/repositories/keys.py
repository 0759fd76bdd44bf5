"""
Key scheme for products in the Redis namespace.

Every product lives under ``product:<uuid>``; the aggregate set
(``products`` by default) holds those keys so they can be enumerated.
"""

import uuid

PRODUCT_KEY_PREFIX = "product:"
PRODUCTS_SET_KEY = "products"


def product_key(product_id: uuid.UUID) -> str:
    """
    Build the store key for a product.

    Args:
        product_id: Product identifier

    Returns:
        Key in format: product:{uuid}
    """
    return f"{PRODUCT_KEY_PREFIX}{product_id}"


def product_key_pattern() -> str:
    """Glob pattern matching every product key."""
    return f"{PRODUCT_KEY_PREFIX}*"
