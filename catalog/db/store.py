"""Ordered record store backed by PostgreSQL."""

import logging
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple

import asyncpg
from asyncpg import Pool

from ..errors.problem_details import InternalServerError
from .connection import get_db_pool
from .filters import Filter, build_where_clause, check_identifier


logger = logging.getLogger(__name__)


class PostgresRecordStore:
    """Record store over a single table, ordered by its id column.

    Cursors are anchored with a subquery on the id column, so a cursor naming
    a row that no longer exists matches nothing and yields an empty result.
    """

    def __init__(
        self,
        table: str,
        columns: Sequence[str],
        *,
        id_column: str = "id",
        row_factory: Callable[[dict], Any] = dict,
        pool_getter: Optional[Callable[[], Awaitable[Pool]]] = None
    ):
        self.table = check_identifier(table)
        self.columns = [check_identifier(column) for column in columns]
        self.id_column = check_identifier(id_column)
        self.row_factory = row_factory
        self._pool_getter = pool_getter

    async def _get_pool(self) -> Pool:
        if self._pool_getter is not None:
            return await self._pool_getter()
        return await get_db_pool()

    def build_query(
        self,
        filters: Optional[Sequence[Filter]] = None,
        cursor: Optional[Any] = None,
        take: int = 1,
        skip: int = 0
    ) -> Tuple[str, List[Any]]:
        """Build the SELECT for one ``find_many`` call.

        Returns:
            Tuple of (query, parameters)
        """
        where_clause, params = build_where_clause(filters)
        conditions = [where_clause]
        forward = take > 0
        id_column = self.id_column

        if cursor is not None:
            params.append(cursor)
            if forward:
                comparison = ">" if skip else ">="
            else:
                comparison = "<" if skip else "<="
            conditions.append(
                f"{id_column} {comparison} "
                f"(SELECT {id_column} FROM {self.table} WHERE {id_column} = ${len(params)})"
            )

        params.append(abs(take))
        select = f"""
            SELECT {", ".join(self.columns)}
            FROM {self.table}
            WHERE {" AND ".join(conditions)}
            ORDER BY {id_column} {"ASC" if forward else "DESC"}
            LIMIT ${len(params)}
        """

        if forward:
            return select, params

        # Backward scans read newest first; hand rows back ascending
        query = f"""
            SELECT * FROM ({select}) AS page
            ORDER BY {id_column} ASC
        """
        return query, params

    async def find_many(
        self,
        *,
        filters: Optional[Sequence[Filter]] = None,
        cursor: Optional[Any] = None,
        take: int,
        skip: int = 0
    ) -> List[Any]:
        """Fetch up to ``abs(take)`` rows ascending by id.

        Raises:
            InternalServerError: If database operation fails
        """
        if take == 0:
            return []

        query, params = self.build_query(filters, cursor, take, skip)
        pool = await self._get_pool()

        try:
            async with pool.acquire() as conn:
                rows = await conn.fetch(query, *params)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error querying {self.table}: {e}")
            raise InternalServerError(f"Database error: {e}")

        logger.debug(f"Fetched {len(rows)} rows from {self.table} (take={take}, skip={skip})")
        return [self.row_factory(dict(row)) for row in rows]

    async def count(self, filters: Optional[Sequence[Filter]] = None) -> int:
        """Count rows matching the filters.

        Raises:
            InternalServerError: If database operation fails
        """
        where_clause, params = build_where_clause(filters)
        query = f"SELECT COUNT(*) FROM {self.table} WHERE {where_clause}"
        pool = await self._get_pool()

        try:
            async with pool.acquire() as conn:
                count = await conn.fetchval(query, *params)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error counting {self.table}: {e}")
            raise InternalServerError(f"Database error: {e}")

        return count or 0
