"""
Shared dependencies for the application.

Provides dependency injection functions used across routers.
"""

from fastapi import Request

from .repositories.product_repository import IProductRepository


async def get_product_repository(request: Request) -> IProductRepository:
    """
    Get the product repository built during startup.

    The repository lives on ``app.state`` so every request shares
    the same Redis client.
    """
    repository = getattr(request.app.state, "product_repository", None)
    if repository is None:
        raise RuntimeError("Product repository not initialized")
    return repository
