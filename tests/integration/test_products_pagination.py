"""Integration tests for product storage and pagination against PostgreSQL."""

import pytest
from decimal import Decimal

from catalog.db.products import (
    count_products, create_product, delete_product, get_product, list_products,
    restore_product, soft_delete_product, update_product
)
from catalog.errors.problem_details import BadRequestError, NotFoundError
from catalog.models.products import (
    ProductCreate, ProductListFilters, ProductPartialUpdate, ProductStatus
)


async def seed(count: int, **fields):
    """Insert ``count`` products and return their ids in insertion order."""
    ids = []
    for i in range(1, count + 1):
        data = ProductCreate(
            name=f"{fields.get('category', 'Item')} {i}",
            price=Decimal(i * 10),
            category=fields.get("category", "Electronics"),
            description=fields.get("description")
        )
        product = await create_product(data, owner_id=1)
        ids.append(product.id)
    return ids


def page_ids(page):
    return [product.id for product in page.data]


class TestProductPagination:
    """Walk real tables with the cursor engine."""

    async def test_forward_pages(self, products_table):
        ids = await seed(5)

        first = await list_products(ProductListFilters(limit=2))
        assert page_ids(first) == ids[:2]
        assert first.page_meta.next_cursor == str(ids[1])
        assert first.page_meta.prev_cursor is None
        assert first.page_meta.has_more is True

        second = await list_products(
            ProductListFilters(limit=2, cursor=first.page_meta.next_cursor)
        )
        assert page_ids(second) == ids[2:4]
        assert second.page_meta.prev_cursor == str(ids[2])
        assert second.page_meta.next_cursor == str(ids[3])

        last = await list_products(
            ProductListFilters(limit=2, cursor=second.page_meta.next_cursor)
        )
        assert page_ids(last) == ids[4:]
        assert last.page_meta.next_cursor is None
        assert last.page_meta.has_more is False

    async def test_backward_pages(self, products_table):
        ids = await seed(5)

        last = await list_products(ProductListFilters(limit=2, direction="prev"))
        assert page_ids(last) == ids[3:]
        assert last.page_meta.next_cursor is None
        assert last.page_meta.prev_cursor == str(ids[3])

        earlier = await list_products(
            ProductListFilters(limit=2, cursor=last.page_meta.prev_cursor, direction="prev")
        )
        assert page_ids(earlier) == ids[1:3]
        assert earlier.page_meta.has_more is True

    async def test_filters_and_soft_delete(self, products_table):
        await seed(3, category="Books", description="A gripping novel")
        games = await seed(2, category="Games")

        books = await list_products(ProductListFilters(category="Books", search="NOVEL"))
        assert books.page_meta.count == 3

        await soft_delete_product(games[0])
        visible = await list_products(ProductListFilters(category="Games"))
        assert page_ids(visible) == games[1:]

        everything = await list_products(
            ProductListFilters(category="Games", include_deleted=True)
        )
        assert page_ids(everything) == games

        await restore_product(games[0])
        assert await count_products(ProductListFilters(category="Games")) == 2

        cheap = await list_products(ProductListFilters(max_price=Decimal("20")))
        assert cheap.page_meta.count == 4

    async def test_deleted_anchor_returns_empty_page(self, products_table):
        ids = await seed(3)
        await delete_product(ids[1])

        page = await list_products(ProductListFilters(limit=2, cursor=str(ids[1])))

        assert page.data == []
        assert page.page_meta.has_more is False


class TestProductCrud:
    """Create, update and delete against a real table."""

    async def test_create_and_get(self, products_table):
        ids = await seed(1)

        product = await get_product(ids[0])

        assert product.name == "Item 1"
        assert product.price == Decimal("10.00")
        assert product.status is ProductStatus.ACTIVE

    async def test_duplicate_name(self, products_table):
        await seed(1)

        with pytest.raises(BadRequestError):
            await seed(1)

    async def test_update(self, products_table):
        ids = await seed(1)

        product = await update_product(ids[0], ProductPartialUpdate(stock=3))

        assert product.stock == 3
        assert product.updated_at >= product.created_at

    async def test_delete(self, products_table):
        ids = await seed(1)

        await delete_product(ids[0])

        with pytest.raises(NotFoundError):
            await get_product(ids[0])
