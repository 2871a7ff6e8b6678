"""Pagination module for cursor-based pagination."""

from .cursor import (
    Direction,
    PageRequest,
    PageMeta,
    PageResult,
    RecordStore,
    encode_cursor,
    decode_cursor,
    record_cursor,
    record_key
)
from .engine import paginate
from .memory import InMemoryRecordStore

__all__ = [
    "Direction",
    "PageRequest",
    "PageMeta",
    "PageResult",
    "RecordStore",
    "encode_cursor",
    "decode_cursor",
    "record_cursor",
    "record_key",
    "paginate",
    "InMemoryRecordStore"
]
