"""
Domain entities for the product catalog.

Core business objects representing products and pagination requests.
These entities are framework-agnostic and contain only business logic.
"""

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List


@dataclass(frozen=True)
class Product:
    """
    A catalog product.

    The identifier is assigned by the caller before insertion and
    never changes once the product is stored.
    """

    product_id: uuid.UUID
    name: str
    description: str
    price: Decimal
    stock_quantity: int

    def __post_init__(self):
        """Validate product fields on creation."""
        if not isinstance(self.product_id, uuid.UUID):
            raise ValueError(f"Invalid product id: {self.product_id!r}")
        if not isinstance(self.price, Decimal):
            raise ValueError(f"Price must be a Decimal, got {type(self.price).__name__}")
        if not self.price.is_finite():
            raise ValueError(f"Price must be finite: {self.price}")
        if isinstance(self.stock_quantity, bool) or not isinstance(self.stock_quantity, int):
            raise ValueError(f"Invalid stock quantity: {self.stock_quantity!r}")
        if self.stock_quantity < 0:
            raise ValueError(f"Stock quantity must be non-negative: {self.stock_quantity}")


@dataclass(frozen=True)
class FindAllPage:
    """
    One step of a product listing.

    ``offset`` is the cursor returned by the previous step (0 to start);
    ``size`` is a hint for how many keys the store should examine.
    """

    size: int = 10
    offset: int = 0

    def __post_init__(self):
        if self.size < 1:
            raise ValueError(f"Page size must be positive: {self.size}")
        if self.offset < 0:
            raise ValueError(f"Cursor must be non-negative: {self.offset}")


@dataclass(frozen=True)
class FindResult:
    """Products found in one listing step plus the cursor for the next one."""

    products: List[Product] = field(default_factory=list)
    cursor: int = 0

    @property
    def is_last_page(self) -> bool:
        """True once the store reports the iteration is complete."""
        return self.cursor == 0
