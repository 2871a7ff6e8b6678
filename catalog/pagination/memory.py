"""In-memory record store."""

import logging
from typing import Any, Callable, Generic, Iterable, List, Optional, Sequence, TypeVar

from ..db.filters import Filter, matches
from .cursor import record_key


logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryRecordStore(Generic[T]):
    """Record store over a fixed collection of records.

    Records are kept ascending by key. The anchor is resolved against every
    record, not only the ones matching the filters, so a cursor issued under
    one filter stays valid under another.
    """

    def __init__(self, records: Iterable[T], key: Callable[[T], Any] = record_key):
        self._key = key
        self._records: List[T] = sorted(records, key=key)

    def __len__(self) -> int:
        return len(self._records)

    async def find_many(
        self,
        *,
        filters: Optional[Sequence[Filter]] = None,
        cursor: Optional[Any] = None,
        take: int,
        skip: int = 0
    ) -> List[T]:
        """Return up to ``abs(take)`` matching records ascending by key."""
        if take == 0:
            return []

        forward = take > 0
        candidates = [r for r in self._records if matches(r, filters)]

        if cursor is not None:
            if not any(self._key(r) == cursor for r in self._records):
                logger.debug(f"Cursor anchor {cursor!r} not found")
                return []

            inclusive = not skip
            if forward:
                candidates = [
                    r for r in candidates
                    if self._key(r) > cursor or (inclusive and self._key(r) == cursor)
                ]
            else:
                candidates = [
                    r for r in candidates
                    if self._key(r) < cursor or (inclusive and self._key(r) == cursor)
                ]

        size = abs(take)
        return candidates[:size] if forward else candidates[-size:]
