"""
Product catalog API router.

Translates HTTP verbs and JSON payloads into repository calls and
maps domain errors onto HTTP status codes.
"""

import uuid

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..config import settings
from ..dependencies import get_product_repository
from ..domain.entities import FindAllPage
from ..domain.exceptions import (
    ProductAlreadyExistsException,
    ProductDecodeException,
    ProductEncodeException,
    ProductNotFoundException,
    ProductServiceException,
    StoreException,
)
from ..models import (
    ErrorResponse,
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from ..repositories.product_repository import IProductRepository

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["products"])

_ERROR_STATUS = {
    ProductNotFoundException: (status.HTTP_404_NOT_FOUND, "not_found"),
    ProductAlreadyExistsException: (status.HTTP_409_CONFLICT, "already_exists"),
    ProductEncodeException: (status.HTTP_422_UNPROCESSABLE_CONTENT, "encode_error"),
    ProductDecodeException: (status.HTTP_500_INTERNAL_SERVER_ERROR, "decode_error"),
    StoreException: (status.HTTP_503_SERVICE_UNAVAILABLE, "store_unavailable"),
}


def _to_http_exception(exc: ProductServiceException) -> HTTPException:
    """Map a domain exception onto the matching HTTP error."""
    status_code, error = _ERROR_STATUS.get(
        type(exc), (status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error")
    )
    return HTTPException(
        status_code=status_code,
        detail={
            "success": False,
            "error": error,
            "message": exc.message,
            "details": exc.details,
        },
    )


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Product created"},
        409: {"description": "Product id already taken", "model": ErrorResponse},
        503: {"description": "Store unavailable", "model": ErrorResponse},
    },
    summary="Create product",
)
async def create_product(
    body: ProductCreate,
    repository: IProductRepository = Depends(get_product_repository),
):
    """
    Create a product.

    The id is taken from the body when given, otherwise a new UUID is assigned.
    """
    product = body.to_entity()

    try:
        await repository.insert(product)
    except ProductServiceException as e:
        logger.warning("Product insert failed", product_id=str(product.product_id), error=e.message)
        raise _to_http_exception(e)

    logger.info("Product created", product_id=str(product.product_id))
    return ProductResponse.from_entity(product)


@router.get(
    "/products",
    response_model=ProductListResponse,
    responses={
        500: {"description": "Corrupt record on page", "model": ErrorResponse},
        503: {"description": "Store unavailable", "model": ErrorResponse},
    },
    summary="List products",
)
async def list_products(
    cursor: int = Query(0, ge=0, description="Cursor from the previous page; 0 to start"),
    size: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="Number of keys to examine in this step",
    ),
    repository: IProductRepository = Depends(get_product_repository),
):
    """
    List one page of products.

    Pages are store scan steps: a page may be empty while the returned
    cursor is non-zero. Keep requesting until the cursor comes back as 0.
    """
    try:
        result = await repository.get_all(FindAllPage(size=size, offset=cursor))
    except ProductServiceException as e:
        logger.error("Product listing failed", cursor=cursor, size=size, error=e.message)
        raise _to_http_exception(e)

    return ProductListResponse(
        products=[ProductResponse.from_entity(p) for p in result.products],
        cursor=result.cursor,
    )


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={
        404: {"description": "Product not found", "model": ErrorResponse},
        503: {"description": "Store unavailable", "model": ErrorResponse},
    },
    summary="Get product",
)
async def get_product(
    product_id: uuid.UUID,
    repository: IProductRepository = Depends(get_product_repository),
):
    """Get a product by id."""
    try:
        product = await repository.get_by_id(product_id)
    except ProductServiceException as e:
        raise _to_http_exception(e)

    return ProductResponse.from_entity(product)


@router.put(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"description": "Body id does not match path", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
        503: {"description": "Store unavailable", "model": ErrorResponse},
    },
    summary="Replace product",
)
async def update_product(
    product_id: uuid.UUID,
    body: ProductUpdate,
    repository: IProductRepository = Depends(get_product_repository),
):
    """Replace every field of an existing product."""
    if body.product_id is not None and body.product_id != product_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "success": False,
                "error": "validation_error",
                "message": "Body product_id does not match path",
                "details": {"path": str(product_id), "body": str(body.product_id)},
            },
        )

    product = body.to_entity(product_id)

    try:
        await repository.update_by_id(product)
    except ProductServiceException as e:
        raise _to_http_exception(e)

    logger.info("Product updated", product_id=str(product_id))
    return ProductResponse.from_entity(product)


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"description": "Product not found", "model": ErrorResponse},
        503: {"description": "Store unavailable", "model": ErrorResponse},
    },
    summary="Delete product",
)
async def delete_product(
    product_id: uuid.UUID,
    repository: IProductRepository = Depends(get_product_repository),
):
    """Delete a product."""
    try:
        await repository.delete(product_id)
    except ProductServiceException as e:
        raise _to_http_exception(e)

    logger.info("Product deleted", product_id=str(product_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
