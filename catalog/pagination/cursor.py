"""Cursor-based pagination models and utilities for the Product Catalog store."""

from enum import Enum
from typing import Any, Callable, Generic, List, Mapping, Optional, Protocol, Sequence, TypeVar

from pydantic import BaseModel, Field, field_validator

from ..config import get_settings
from ..errors.problem_details import BadRequestError


T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class Direction(str, Enum):
    """Scan direction relative to the cursor."""

    NEXT = "next"
    PREV = "prev"


def default_limit() -> int:
    """Page size used when a request does not specify one."""
    return get_settings().default_page_size


def max_limit() -> int:
    """Largest page size a request may ask for."""
    return get_settings().max_page_size


class PageRequest(BaseModel):
    """Query parameters for a cursor paginated listing."""

    cursor: Optional[str] = Field(default=None, description="Cursor for pagination")
    limit: int = Field(default_factory=default_limit, ge=1, description="Number of items per page")
    direction: Direction = Field(default=Direction.NEXT, description="Page direction relative to the cursor")

    @field_validator("cursor", mode="before")
    @classmethod
    def blank_cursor_is_absent(cls, v):
        """Treat an empty cursor as no cursor."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v):
        """Reject page sizes above the configured maximum."""
        maximum = max_limit()
        if v > maximum:
            raise ValueError(f"Limit must be at most {maximum}")
        return v


class PageMeta(BaseModel):
    """Pagination metadata derived from a single page."""

    next_cursor: Optional[str] = Field(default=None, description="Cursor for next page")
    prev_cursor: Optional[str] = Field(default=None, description="Cursor for previous page")
    has_more: bool = Field(description="Whether more items exist in the requested direction")
    count: int = Field(ge=0, description="Number of items in this page")


class PageResult(BaseModel, Generic[T]):
    """Response model for paginated data."""

    data: List[T] = Field(description="Items in this page, ascending by id")
    page_meta: PageMeta = Field(description="Pagination metadata")

    model_config = {"arbitrary_types_allowed": True}


class RecordStore(Protocol[T_co]):
    """Ordered record store the pagination engine queries.

    ``find_many`` returns records matching ``filters`` ascending by id. With a
    cursor, the scan starts at the anchor record; ``skip=1`` leaves the anchor
    itself out. A positive ``take`` scans forward, a negative one backward,
    and ``abs(take)`` caps the number of rows.
    """

    async def find_many(
        self,
        *,
        filters: Optional[Sequence[Any]] = None,
        cursor: Optional[Any] = None,
        take: int,
        skip: int = 0
    ) -> Sequence[T_co]:
        ...


def record_key(record: Any) -> Any:
    """Return the id of a mapping or object record."""
    if isinstance(record, Mapping):
        return record["id"]
    return record.id


def encode_cursor(record_id: Any) -> str:
    """Encode a record id as a cursor token."""
    return str(record_id)


def record_cursor(record: Any) -> str:
    """Cursor token pointing at a record."""
    return encode_cursor(record_key(record))


def decode_cursor(cursor: str, parse: Callable[[str], Any] = int) -> Any:
    """Decode a cursor token back into a record id.

    Args:
        cursor: Cursor token issued by a previous page
        parse: Converts the token into the id type

    Returns:
        Decoded record id

    Raises:
        BadRequestError: If cursor is empty or cannot be parsed
    """
    if not cursor:
        raise BadRequestError("Empty cursor provided")

    try:
        return parse(cursor)
    except (ValueError, TypeError) as e:
        raise BadRequestError(f"Invalid cursor format: {e}")
