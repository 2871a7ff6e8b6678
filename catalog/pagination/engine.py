"""Cursor pagination over an ordered record store."""

import logging
from typing import Any, Callable, Optional, Sequence

from .cursor import (
    Direction, PageMeta, PageRequest, PageResult, RecordStore,
    decode_cursor, record_cursor
)


logger = logging.getLogger(__name__)


async def paginate(
    store: RecordStore,
    request: PageRequest,
    *,
    filters: Optional[Sequence[Any]] = None,
    parse_cursor: Callable[[str], Any] = int,
    cursor_value: Callable[[Any], str] = record_cursor
) -> PageResult:
    """Fetch one page of records and derive its cursors.

    A single query asks the store for ``limit + 1`` rows in the requested
    direction; the extra row only tells us whether more data exists and is
    never returned.

    Args:
        store: Ordered record store to query
        request: Already validated page request
        filters: Conditions passed through to the store untouched
        parse_cursor: Converts a cursor token into the store's id type
        cursor_value: Builds the cursor token for a record

    Returns:
        The page, ascending by id, with its pagination metadata

    Raises:
        BadRequestError: If the cursor token cannot be parsed
    """
    limit = request.limit
    forward = request.direction == Direction.NEXT

    anchor = None
    if request.cursor is not None:
        anchor = decode_cursor(request.cursor, parse_cursor)
    anchored = anchor is not None

    overfetch = limit + 1
    records = list(await store.find_many(
        filters=filters,
        cursor=anchor,
        take=overfetch if forward else -overfetch,
        skip=1 if anchored else 0
    ))

    has_more = len(records) > limit

    # The lookahead row trails a forward scan and leads a backward one
    if not has_more:
        page = records
    elif forward:
        page = records[:limit]
    else:
        page = records[-limit:]

    if forward:
        has_next, has_prev = has_more, anchored
    else:
        has_next, has_prev = anchored, has_more

    page_meta = PageMeta(
        next_cursor=cursor_value(page[-1]) if page and has_next else None,
        prev_cursor=cursor_value(page[0]) if page and has_prev else None,
        has_more=has_more,
        count=len(page)
    )

    logger.debug(
        f"Paginated {request.direction.value} from cursor {request.cursor!r}: "
        f"{page_meta.count} records, has_more={has_more}"
    )

    return PageResult(data=page, page_meta=page_meta)
