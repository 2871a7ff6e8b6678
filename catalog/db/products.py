"""Database operations for products."""

import logging
from typing import Any, List, Optional, Union

import asyncpg

from ..models.products import (
    Product, ProductCreate, ProductUpdate, ProductPartialUpdate, ProductListFilters
)
from ..pagination import PageResult, paginate
from ..errors.problem_details import (
    BadRequestError, NotFoundError, InternalServerError, ProblemDetailException
)
from .connection import get_db_pool
from .filters import AnyOf, Condition, Filter
from .store import PostgresRecordStore


logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = [
    "id", "name", "description", "price", "category", "stock", "status",
    "owner_id", "created_at", "updated_at", "deleted_at"
]

_RETURNING = ", ".join(PRODUCT_COLUMNS)

# Only description may be cleared by an update
_REQUIRED_COLUMNS = ("name", "category", "stock", "status")


def row_to_product(row: Any) -> Product:
    """Convert a database row to a Product model."""
    return Product.model_validate(dict(row))


product_store = PostgresRecordStore("products", PRODUCT_COLUMNS, row_factory=row_to_product)


def build_product_filters(filters: ProductListFilters) -> List[Filter]:
    """Translate listing filters into store conditions.

    Args:
        filters: Listing filters

    Returns:
        Conditions joined with AND
    """
    conditions: List[Filter] = []

    if filters.category:
        conditions.append(Condition("category", "eq", filters.category))
    if filters.status:
        conditions.append(Condition("status", "eq", filters.status.value))

    # Search matches either name or description, case-insensitively
    if filters.search:
        conditions.append(AnyOf((
            Condition("name", "contains", filters.search),
            Condition("description", "contains", filters.search),
        )))

    if filters.min_price is not None:
        conditions.append(Condition("price", "gte", filters.min_price))
    if filters.max_price is not None:
        conditions.append(Condition("price", "lte", filters.max_price))

    if not filters.include_deleted:
        conditions.append(Condition("deleted_at", "is_null", True))

    return conditions


async def find_product_by_name(name: str) -> Optional[Product]:
    """Find the first product with the given name.

    Raises:
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            query = f"""
                SELECT {_RETURNING}
                FROM products
                WHERE name = $1
                ORDER BY id ASC
                LIMIT 1
            """
            row = await conn.fetchrow(query, name)
            return row_to_product(row) if row else None

    except asyncpg.PostgresError as e:
        logger.error(f"Database error finding product by name: {e}")
        raise InternalServerError(f"Database error: {e}")


async def create_product(data: ProductCreate, owner_id: Optional[int] = None) -> Product:
    """Create a new product.

    Args:
        data: Product creation data
        owner_id: Id of the creating user

    Returns:
        Created product

    Raises:
        BadRequestError: If a product with the same name exists
        InternalServerError: If database operation fails
    """
    if await find_product_by_name(data.name):
        raise BadRequestError("Product name already exists")

    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            query = f"""
                INSERT INTO products (name, description, price, category, stock, status, owner_id)
                VALUES ($1, $2, $3, $4, $5, $6, $7)
                RETURNING {_RETURNING}
            """

            row = await conn.fetchrow(
                query,
                data.name,
                data.description,
                data.price,
                data.category,
                data.stock,
                data.status.value,
                owner_id
            )

            if not row:
                raise InternalServerError("Failed to create product")

            product = row_to_product(row)
            logger.info(f"Created product {product.id} ({product.name})")
            return product

    except ProblemDetailException:
        raise
    except asyncpg.UniqueViolationError:
        raise BadRequestError("Product name already exists")
    except asyncpg.PostgresError as e:
        logger.error(f"Database error creating product: {e}")
        raise InternalServerError(f"Database error: {e}")


async def get_product(product_id: int, include_deleted: bool = False) -> Product:
    """Get a product by id.

    Args:
        product_id: Id of the product
        include_deleted: Also return soft deleted products

    Returns:
        The requested product

    Raises:
        NotFoundError: If product doesn't exist
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            query = f"""
                SELECT {_RETURNING}
                FROM products
                WHERE id = $1
            """
            if not include_deleted:
                query += " AND deleted_at IS NULL"

            row = await conn.fetchrow(query, product_id)

            if not row:
                raise NotFoundError("Product not found")

            logger.debug(f"Retrieved product {product_id}")
            return row_to_product(row)

    except NotFoundError:
        raise
    except asyncpg.PostgresError as e:
        logger.error(f"Database error retrieving product: {e}")
        raise InternalServerError(f"Database error: {e}")


async def list_products(filters: ProductListFilters) -> PageResult:
    """List products one cursor page at a time.

    Args:
        filters: Listing filters and pagination parameters

    Returns:
        Page of products with pagination metadata

    Raises:
        BadRequestError: If the cursor is malformed
        InternalServerError: If database operation fails
    """
    page = await paginate(product_store, filters, filters=build_product_filters(filters))
    logger.debug(f"Listed {page.page_meta.count} products")
    return page


async def update_product(
    product_id: int,
    data: Union[ProductUpdate, ProductPartialUpdate]
) -> Product:
    """Update a product (full or partial).

    Args:
        product_id: Id of the product to update
        data: Fields to change; unset fields are left alone

    Returns:
        Updated product

    Raises:
        NotFoundError: If product doesn't exist
        BadRequestError: If the new price is not positive or a required field is null
        InternalServerError: If database operation fails
    """
    await get_product(product_id)

    changes = data.model_dump(exclude_unset=True)
    if "price" in changes and (changes["price"] is None or changes["price"] <= 0):
        raise BadRequestError("Price must be greater than 0")
    cleared = sorted(
        column for column in _REQUIRED_COLUMNS
        if column in changes and changes[column] is None
    )
    if cleared:
        raise BadRequestError(f"Fields cannot be null: {', '.join(cleared)}", fields=cleared)
    if "status" in changes and changes["status"] is not None:
        changes["status"] = changes["status"].value

    assignments = [f"{column} = ${index}" for index, column in enumerate(changes, start=2)]
    assignments.append("updated_at = now()")

    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            query = f"""
                UPDATE products
                SET {", ".join(assignments)}
                WHERE id = $1
                RETURNING {_RETURNING}
            """

            row = await conn.fetchrow(query, product_id, *changes.values())

            if not row:
                raise NotFoundError("Product not found")

            product = row_to_product(row)
            logger.info(f"Updated product {product_id}: {sorted(changes)}")
            return product

    except NotFoundError:
        raise
    except asyncpg.UniqueViolationError:
        raise BadRequestError("Product name already exists")
    except asyncpg.PostgresError as e:
        logger.error(f"Database error updating product: {e}")
        raise InternalServerError(f"Database error: {e}")


async def delete_product(product_id: int) -> Product:
    """Delete a product permanently.

    Returns:
        The deleted product

    Raises:
        NotFoundError: If product doesn't exist
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            query = f"""
                DELETE FROM products
                WHERE id = $1
                RETURNING {_RETURNING}
            """

            row = await conn.fetchrow(query, product_id)

            if not row:
                raise NotFoundError("Product not found")

            logger.info(f"Deleted product {product_id}")
            return row_to_product(row)

    except NotFoundError:
        raise
    except asyncpg.PostgresError as e:
        logger.error(f"Database error deleting product: {e}")
        raise InternalServerError(f"Database error: {e}")


async def _set_deleted_at(product_id: int, deleted: bool) -> Product:
    pool = await get_db_pool()
    value = "now()" if deleted else "NULL"

    try:
        async with pool.acquire() as conn:
            query = f"""
                UPDATE products
                SET deleted_at = {value}, updated_at = now()
                WHERE id = $1
                RETURNING {_RETURNING}
            """

            row = await conn.fetchrow(query, product_id)

            if not row:
                raise NotFoundError("Product not found")

            return row_to_product(row)

    except NotFoundError:
        raise
    except asyncpg.PostgresError as e:
        logger.error(f"Database error updating deleted_at: {e}")
        raise InternalServerError(f"Database error: {e}")


async def soft_delete_product(product_id: int) -> Product:
    """Mark a product as deleted without removing the row.

    Raises:
        NotFoundError: If product doesn't exist
        InternalServerError: If database operation fails
    """
    product = await _set_deleted_at(product_id, deleted=True)
    logger.info(f"Soft deleted product {product_id}")
    return product


async def restore_product(product_id: int) -> Product:
    """Clear the soft delete mark of a product.

    Raises:
        NotFoundError: If product doesn't exist
        InternalServerError: If database operation fails
    """
    product = await _set_deleted_at(product_id, deleted=False)
    logger.info(f"Restored product {product_id}")
    return product


async def count_products(filters: Optional[ProductListFilters] = None) -> int:
    """Count products matching the listing filters.

    Raises:
        InternalServerError: If database operation fails
    """
    conditions = build_product_filters(filters or ProductListFilters())
    count = await product_store.count(conditions)
    logger.debug(f"Counted {count} products")
    return count
