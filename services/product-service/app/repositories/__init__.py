"""
Repository layer - Data access abstractions.

This layer maps products onto the Redis key space and hides
store-specific outcomes behind domain exceptions.
"""

from .product_repository import IProductRepository
from .redis_product_repository import RedisProductRepository

__all__ = ["IProductRepository", "RedisProductRepository"]
