"""Pydantic models for products."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from ..pagination import PageRequest


class ProductStatus(str, Enum):
    """Lifecycle status of a product."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class ProductBase(BaseModel):
    """Base product model with common fields."""

    name: str = Field(..., min_length=1, max_length=50, description="Unique product name")
    description: Optional[str] = Field(default=None, max_length=500, description="Product description")
    price: Decimal = Field(..., gt=0, description="Unit price")
    category: str = Field(..., max_length=50, description="Product category")
    stock: int = Field(default=0, ge=0, description="Units in stock")
    status: ProductStatus = Field(default=ProductStatus.ACTIVE, description="Product status")


class ProductCreate(ProductBase):
    """Model for creating a new product."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Mechanical Keyboard",
                "description": "Tenkeyless, brown switches",
                "price": "89.90",
                "category": "Electronics",
                "stock": 25
            }
        }
    )


class ProductUpdate(ProductBase):
    """Model for replacing all editable product fields."""


class ProductPartialUpdate(BaseModel):
    """Model for updating a product (partial updates)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=500)
    price: Optional[Decimal] = Field(default=None)
    category: Optional[str] = Field(default=None, max_length=50)
    stock: Optional[int] = Field(default=None, ge=0)
    status: Optional[ProductStatus] = Field(default=None)


class Product(BaseModel):
    """Complete product model with all fields.

    Mirrors the stored row, so the write-side length limits are not applied.
    """

    id: int = Field(description="Product id, also used as the pagination cursor")
    name: str = Field(description="Unique product name")
    description: Optional[str] = Field(default=None, description="Product description")
    price: Decimal = Field(description="Unit price")
    category: str = Field(description="Product category")
    stock: int = Field(default=0, description="Units in stock")
    status: ProductStatus = Field(default=ProductStatus.ACTIVE, description="Product status")
    owner_id: Optional[int] = Field(default=None, description="Id of the user who created the product")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")
    deleted_at: Optional[datetime] = Field(default=None, description="Soft delete timestamp")

    model_config = ConfigDict(from_attributes=True)


class ProductListFilters(PageRequest):
    """Filters and pagination parameters for listing products."""

    category: Optional[str] = Field(default=None, max_length=50)
    status: Optional[ProductStatus] = Field(default=None)
    search: Optional[str] = Field(default=None, max_length=100, description="Matches name or description")
    min_price: Optional[Decimal] = Field(default=None, gt=0)
    max_price: Optional[Decimal] = Field(default=None, gt=0)
    include_deleted: bool = Field(default=False, description="Include soft deleted products")
