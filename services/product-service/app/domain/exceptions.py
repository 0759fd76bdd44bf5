"""
Custom exceptions for the product service domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, Redis, etc.).
"""

from typing import Optional


class ProductServiceException(Exception):
    """Base exception for all product service errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ProductNotFoundException(ProductServiceException):
    """Raised when no product is stored under the requested id."""

    def __init__(self, product_id: str, operation: Optional[str] = None):
        message = f"Product does not exist: {product_id}"
        super().__init__(
            message=message, details={"product_id": product_id, "operation": operation}
        )


class ProductAlreadyExistsException(ProductServiceException):
    """Raised when inserting a product whose id is already taken."""

    def __init__(self, product_id: str):
        message = f"Product already exists: {product_id}"
        super().__init__(message=message, details={"product_id": product_id})


class ProductEncodeException(ProductServiceException):
    """Raised when a product cannot be serialized for storage."""

    def __init__(self, product_id: Optional[str], reason: str):
        message = f"Failed to encode product {product_id}: {reason}"
        super().__init__(
            message=message, details={"product_id": product_id, "reason": reason}
        )


class ProductDecodeException(ProductServiceException):
    """Raised when a stored payload cannot be parsed back into a product."""

    def __init__(self, key: Optional[str], reason: str):
        message = "Failed to decode product"
        if key:
            message += f" at {key}"
        message += f": {reason}"
        super().__init__(message=message, details={"key": key, "reason": reason})


class StoreException(ProductServiceException):
    """Raised when the key-value store fails (connection, timeout, protocol)."""

    def __init__(self, operation: str, key: Optional[str] = None, reason: Optional[str] = None):
        message = f"Store {operation} failed"
        if key:
            message += f" for {key}"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message, details={"operation": operation, "key": key, "reason": reason}
        )
