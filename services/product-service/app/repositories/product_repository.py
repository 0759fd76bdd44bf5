"""
Product repository interface (Abstract Base Class).

Defines the contract for product persistence and retrieval
independent of the underlying storage mechanism.
"""

import uuid
from abc import ABC, abstractmethod

from ..domain.entities import FindAllPage, FindResult, Product


class IProductRepository(ABC):
    """
    Abstract repository interface for product catalog operations.

    Every method raises a subclass of ProductServiceException on
    failure rather than leaking storage-specific errors.
    """

    @abstractmethod
    async def insert(self, product: Product) -> None:
        """
        Store a new product.

        Args:
            product: Product to store, with its id already assigned

        Raises:
            ProductAlreadyExistsException: If a product with the same id exists
            ProductEncodeException: If the product cannot be serialized
            StoreException: If the store fails
        """
        pass

    @abstractmethod
    async def get_by_id(self, product_id: uuid.UUID) -> Product:
        """
        Fetch a product by id.

        Raises:
            ProductNotFoundException: If no product has this id
            ProductDecodeException: If the stored record is corrupt
            StoreException: If the store fails
        """
        pass

    @abstractmethod
    async def update_by_id(self, product: Product) -> None:
        """
        Replace an existing product with a new version.

        Raises:
            ProductNotFoundException: If no product has this id
            ProductEncodeException: If the product cannot be serialized
            StoreException: If the store fails
        """
        pass

    @abstractmethod
    async def delete(self, product_id: uuid.UUID) -> None:
        """
        Remove a product.

        Raises:
            ProductNotFoundException: If no product has this id
            StoreException: If the store fails
        """
        pass

    @abstractmethod
    async def get_all(self, page: FindAllPage) -> FindResult:
        """
        Run one listing step.

        Args:
            page: Cursor and size hint for this step

        Returns:
            Products found plus the cursor for the next step (0 when done)

        Raises:
            ProductDecodeException: If any stored record on the page is corrupt
            StoreException: If the store fails
        """
        pass
