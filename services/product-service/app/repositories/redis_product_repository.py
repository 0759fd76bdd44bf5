"""
Redis implementation of the product repository.

Each product is one JSON record under ``product:<uuid>``. Existence
rules rely on Redis' own conditional writes (SET NX / SET XX) so that
concurrent requests on the same id are arbitrated by the store.
"""

import logging
import uuid
from typing import List, Union

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..domain.entities import FindAllPage, FindResult, Product
from ..domain.exceptions import (
    ProductAlreadyExistsException,
    ProductNotFoundException,
    StoreException,
)
from .keys import PRODUCTS_SET_KEY, product_key, product_key_pattern
from .product_codec import decode_product, encode_product
from .product_repository import IProductRepository

logger = logging.getLogger(__name__)


def _key_str(key: Union[bytes, str]) -> str:
    return key.decode("utf-8") if isinstance(key, bytes) else key


class RedisProductRepository(IProductRepository):
    """
    Redis-backed product catalog.

    The repository owns no per-call state; a single instance can be
    shared by all requests as long as the client is (redis.asyncio
    clients backed by a connection pool are).
    """

    def __init__(self, redis_client: redis.Redis, set_key: str = PRODUCTS_SET_KEY):
        """
        Initialize Redis repository.

        Args:
            redis_client: Async Redis client
            set_key: Name of the set that tracks every product key
        """
        self.redis = redis_client
        self.set_key = set_key

    async def insert(self, product: Product) -> None:
        """
        Store a new product; rejected by Redis if the key already exists.

        The key joins the product set before the record is written, so a
        failure part way leaves at most a member without a record, which
        get_all skips. SADD is idempotent, so a rejected insert leaves the
        set as it was.
        """
        payload = encode_product(product)
        key = product_key(product.product_id)

        try:
            await self.redis.sadd(self.set_key, key)
        except RedisError as e:
            logger.error(f"Error registering {key} in {self.set_key}: {e}")
            raise StoreException("insert", key, str(e)) from e

        try:
            created = await self.redis.set(key, payload, nx=True)
        except RedisError as e:
            logger.error(f"Error inserting product {key}: {e}")
            raise StoreException("insert", key, str(e)) from e

        if not created:
            logger.info(f"Insert rejected, key exists: {key}")
            raise ProductAlreadyExistsException(str(product.product_id))

        logger.debug(f"Inserted product: {key}")

    async def get_by_id(self, product_id: uuid.UUID) -> Product:
        """Fetch a product by id."""
        key = product_key(product_id)

        try:
            payload = await self.redis.get(key)
        except RedisError as e:
            logger.error(f"Error reading product {key}: {e}")
            raise StoreException("get", key, str(e)) from e

        if payload is None:
            logger.debug(f"Product not found: {key}")
            raise ProductNotFoundException(str(product_id), "get")

        return decode_product(payload, key)

    async def update_by_id(self, product: Product) -> None:
        """Replace a product; rejected by Redis if the key does not exist."""
        payload = encode_product(product)
        key = product_key(product.product_id)

        try:
            updated = await self.redis.set(key, payload, xx=True)
        except RedisError as e:
            logger.error(f"Error updating product {key}: {e}")
            raise StoreException("update", key, str(e)) from e

        if not updated:
            logger.debug(f"Update rejected, key missing: {key}")
            raise ProductNotFoundException(str(product.product_id), "update")

        logger.debug(f"Updated product: {key}")

    async def delete(self, product_id: uuid.UUID) -> None:
        """Remove a product and its membership in the product set."""
        key = product_key(product_id)

        try:
            removed = await self.redis.delete(key)
            await self.redis.srem(self.set_key, key)
        except RedisError as e:
            logger.error(f"Error deleting product {key}: {e}")
            raise StoreException("delete", key, str(e)) from e

        if removed == 0:
            logger.debug(f"Delete found nothing: {key}")
            raise ProductNotFoundException(str(product_id), "delete")

        logger.debug(f"Deleted product: {key}")

    async def get_all(self, page: FindAllPage) -> FindResult:
        """
        Run one SSCAN step over the product set and load the records found.

        The returned cursor is Redis' scan cursor, not an offset: pass it
        back unchanged and stop once it is 0. A step may return no
        products while the cursor is still non-zero.
        """
        try:
            cursor, keys = await self.redis.sscan(
                self.set_key,
                cursor=page.offset,
                match=product_key_pattern(),
                count=page.size,
            )
        except RedisError as e:
            logger.error(f"Error scanning {self.set_key} at cursor {page.offset}: {e}")
            raise StoreException("scan", self.set_key, str(e)) from e

        cursor = int(cursor)
        if not keys:
            return FindResult(products=[], cursor=cursor)

        try:
            payloads = await self.redis.mget(keys)
        except RedisError as e:
            logger.error(f"Error loading {len(keys)} products: {e}")
            raise StoreException("mget", self.set_key, str(e)) from e

        products: List[Product] = []
        for key, payload in zip(keys, payloads):
            key = _key_str(key)
            if payload is None:
                # Member without a record: deleted between SSCAN and MGET.
                logger.warning(f"Skipping stale member of {self.set_key}: {key}")
                continue
            products.append(decode_product(payload, key))

        logger.debug(f"Listed {len(products)} products, next cursor {cursor}")
        return FindResult(products=products, cursor=cursor)
