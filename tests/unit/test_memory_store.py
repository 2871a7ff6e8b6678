"""Unit tests for the in-memory record store."""

import pytest

from catalog.db.filters import Condition
from catalog.pagination import InMemoryRecordStore


def ids(records):
    return [record["id"] for record in records]


class TestInMemoryRecordStore:
    """Test find_many against ids 1..5."""

    @pytest.mark.asyncio
    async def test_sorts_records(self):
        store = InMemoryRecordStore([{"id": 3}, {"id": 1}, {"id": 2}])

        assert len(store) == 3
        assert ids(await store.find_many(take=10)) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_forward_without_cursor(self, five_records):
        assert ids(await five_records.find_many(take=3)) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_backward_without_cursor(self, five_records):
        assert ids(await five_records.find_many(take=-3)) == [3, 4, 5]

    @pytest.mark.asyncio
    async def test_forward_from_cursor(self, five_records):
        assert ids(await five_records.find_many(cursor=2, take=2, skip=1)) == [3, 4]
        assert ids(await five_records.find_many(cursor=2, take=2, skip=0)) == [2, 3]

    @pytest.mark.asyncio
    async def test_backward_from_cursor(self, five_records):
        assert ids(await five_records.find_many(cursor=4, take=-2, skip=1)) == [2, 3]
        assert ids(await five_records.find_many(cursor=4, take=-2, skip=0)) == [3, 4]

    @pytest.mark.asyncio
    async def test_zero_take(self, five_records):
        assert await five_records.find_many(take=0) == []

    @pytest.mark.asyncio
    async def test_unknown_anchor(self, five_records):
        assert await five_records.find_many(cursor=99, take=3, skip=1) == []
        assert await five_records.find_many(cursor=99, take=-3, skip=1) == []

    @pytest.mark.asyncio
    async def test_filters_apply_after_anchor(self):
        store = InMemoryRecordStore([
            {"id": i, "category": "Books" if i % 2 else "Games"} for i in range(1, 8)
        ])
        books = [Condition("category", "eq", "Books")]

        assert ids(await store.find_many(filters=books, take=10)) == [1, 3, 5, 7]
        # The anchor does not have to match the filters
        assert ids(await store.find_many(filters=books, cursor=2, take=2, skip=1)) == [3, 5]
        assert ids(await store.find_many(filters=books, cursor=6, take=-2, skip=1)) == [3, 5]

    @pytest.mark.asyncio
    async def test_custom_key(self):
        store = InMemoryRecordStore(
            [{"sku": "b"}, {"sku": "a"}, {"sku": "c"}],
            key=lambda record: record["sku"]
        )

        records = await store.find_many(cursor="a", take=5, skip=1)

        assert [record["sku"] for record in records] == ["b", "c"]
