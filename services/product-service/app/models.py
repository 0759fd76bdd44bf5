"""Pydantic models for request/response validation."""

import uuid
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from .domain.entities import Product


class ProductBase(BaseModel):
    """Fields shared by product requests and responses."""

    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    description: str = Field(default="", max_length=5000, description="Free text description")
    price: Decimal = Field(..., ge=0, allow_inf_nan=False, description="Unit price")
    stock_quantity: int = Field(..., ge=0, description="Units in stock")


class ProductCreate(ProductBase):
    """Request model for creating a product."""

    product_id: Optional[uuid.UUID] = Field(
        None, description="Product id; generated when omitted"
    )

    def to_entity(self) -> Product:
        return Product(
            product_id=self.product_id or uuid.uuid4(),
            name=self.name,
            description=self.description,
            price=self.price,
            stock_quantity=self.stock_quantity,
        )


class ProductUpdate(ProductBase):
    """Request model for replacing a product."""

    product_id: Optional[uuid.UUID] = Field(
        None, description="Must match the path id when given"
    )

    def to_entity(self, product_id: uuid.UUID) -> Product:
        return Product(
            product_id=product_id,
            name=self.name,
            description=self.description,
            price=self.price,
            stock_quantity=self.stock_quantity,
        )


class ProductResponse(BaseModel):
    """Product response model; mirrors the stored record without input limits."""

    product_id: uuid.UUID
    name: str
    description: str
    price: Decimal
    stock_quantity: int

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponse":
        return cls(
            product_id=product.product_id,
            name=product.name,
            description=product.description,
            price=product.price,
            stock_quantity=product.stock_quantity,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "product_id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                "name": "Mug",
                "description": "Ceramic mug, 350ml",
                "price": "9.99",
                "stock_quantity": 100,
            }
        }


class ProductListResponse(BaseModel):
    """One page of products plus the cursor for the next request."""

    products: List[ProductResponse]
    cursor: int = Field(..., description="Pass as ?cursor= to continue; 0 when finished")


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error: str
    message: str
    details: dict = {}
