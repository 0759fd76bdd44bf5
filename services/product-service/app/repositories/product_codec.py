"""
JSON codec for products stored in Redis.

Prices are written as strings so that Decimal values survive the
round-trip unchanged. Numeric prices (as written by older clients)
are still accepted on read and parsed straight into Decimal.
"""

import json
import uuid
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from ..domain.entities import Product
from ..domain.exceptions import ProductDecodeException, ProductEncodeException

_FIELDS = ("product_id", "name", "description", "price", "stock_quantity")


def serialize_product(product: Product) -> dict:
    """Serialize product entity to dict for JSON storage."""
    return {
        "product_id": str(product.product_id),
        "name": product.name,
        "description": product.description,
        "price": str(product.price),
        "stock_quantity": product.stock_quantity,
    }


def deserialize_product(data: dict) -> Product:
    """Deserialize dict to product entity."""
    missing = [name for name in _FIELDS if name not in data]
    if missing:
        raise ValueError(f"missing fields: {', '.join(missing)}")

    for name in ("name", "description"):
        if not isinstance(data[name], str):
            raise ValueError(f"{name} must be a string")

    price = data["price"]
    if isinstance(price, bool) or not isinstance(price, (str, int, Decimal)):
        raise ValueError("price must be a decimal string or number")

    return Product(
        product_id=uuid.UUID(data["product_id"]),
        name=data["name"],
        description=data["description"],
        price=Decimal(price),
        stock_quantity=data["stock_quantity"],
    )


def encode_product(product: Product) -> bytes:
    """
    Encode a product into its stored payload.

    Raises:
        ProductEncodeException: If the product cannot be serialized
    """
    product_id = getattr(product, "product_id", None)
    try:
        data = serialize_product(product)
        for name in ("name", "description"):
            if not isinstance(data[name], str):
                raise TypeError(f"{name} must be a string")
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError, AttributeError) as e:
        raise ProductEncodeException(str(product_id) if product_id else None, str(e)) from e


def decode_product(payload: Union[bytes, str], key: Optional[str] = None) -> Product:
    """
    Decode a stored payload back into a product.

    Args:
        payload: Raw value read from the store
        key: Store key the payload came from (used for error context)

    Raises:
        ProductDecodeException: If the payload is not a well-formed product
    """
    try:
        data = json.loads(payload, parse_float=Decimal)
        if not isinstance(data, dict):
            raise ValueError("payload is not a JSON object")
        return deserialize_product(data)
    except (ValueError, TypeError, AttributeError, InvalidOperation) as e:
        raise ProductDecodeException(key, str(e)) from e
