"""Pydantic models for the Product Catalog store."""

from .products import (
    ProductStatus,
    ProductBase,
    ProductCreate,
    ProductUpdate,
    ProductPartialUpdate,
    Product,
    ProductListFilters
)

__all__ = [
    "ProductStatus",
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
    "ProductPartialUpdate",
    "Product",
    "ProductListFilters"
]
