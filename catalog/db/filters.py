"""Filter conditions shared by the record stores.

Callers compose a list of ``Condition`` / ``AnyOf`` items. The Postgres store
renders them into a parameterised WHERE clause; the in-memory store evaluates
them directly against records.
"""

import operator
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union


IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

SQL_OPERATORS = {
    "eq": "=",
    "ne": "<>",
    "lt": "<",
    "lte": "<=",
    "gt": ">",
    "gte": ">=",
}

PYTHON_OPERATORS = {
    "eq": operator.eq,
    "ne": operator.ne,
    "lt": operator.lt,
    "lte": operator.le,
    "gt": operator.gt,
    "gte": operator.ge,
}

SUPPORTED_OPERATORS = frozenset(SQL_OPERATORS) | {"contains", "is_null"}


@dataclass(frozen=True)
class Condition:
    """A single column comparison."""

    column: str
    operator: str = "eq"
    value: Any = None

    def __post_init__(self):
        check_identifier(self.column)
        if self.operator not in SUPPORTED_OPERATORS:
            raise ValueError(
                f"Unsupported operator '{self.operator}', "
                f"expected one of: {sorted(SUPPORTED_OPERATORS)}"
            )


@dataclass(frozen=True)
class AnyOf:
    """Matches when at least one of its conditions matches."""

    conditions: Tuple[Condition, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "conditions", tuple(self.conditions))


Filter = Union[Condition, AnyOf]


def check_identifier(name: str) -> str:
    """Ensure a table or column name is safe to interpolate into SQL.

    Raises:
        ValueError: If the name is not a plain identifier
    """
    if not isinstance(name, str) or not IDENTIFIER_PATTERN.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _render_condition(condition: Condition, params: List[Any], start: int) -> str:
    column = condition.column

    if condition.operator == "is_null":
        return f"{column} IS NULL" if condition.value else f"{column} IS NOT NULL"

    params.append(
        f"%{escape_like(str(condition.value))}%"
        if condition.operator == "contains"
        else condition.value
    )
    placeholder = f"${start + len(params)}"

    if condition.operator == "contains":
        return f"{column} ILIKE {placeholder}"
    return f"{column} {SQL_OPERATORS[condition.operator]} {placeholder}"


def build_where_clause(
    filters: Optional[Sequence[Filter]] = None,
    start: int = 0
) -> Tuple[str, List[Any]]:
    """Build a WHERE clause body from filter conditions.

    Args:
        filters: Conditions joined with AND
        start: Number of placeholders already used by the enclosing query

    Returns:
        Tuple of (where_clause, parameters)
    """
    conditions = []
    params: List[Any] = []

    for item in filters or ():
        if isinstance(item, AnyOf):
            if not item.conditions:
                # An empty OR group matches nothing
                conditions.append("FALSE")
                continue
            parts = [_render_condition(c, params, start) for c in item.conditions]
            conditions.append("(" + " OR ".join(parts) + ")")
        else:
            conditions.append(_render_condition(item, params, start))

    where_clause = " AND ".join(conditions) if conditions else "TRUE"
    return where_clause, params


def _field(record: Any, column: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(column)
    return getattr(record, column, None)


def _matches_condition(record: Any, condition: Condition) -> bool:
    value = _field(record, condition.column)

    if condition.operator == "is_null":
        return (value is None) == bool(condition.value)
    if value is None or condition.value is None:
        # SQL comparison semantics: NULL never matches
        return False
    if condition.operator == "contains":
        return str(condition.value).lower() in str(value).lower()
    return PYTHON_OPERATORS[condition.operator](value, condition.value)


def matches(record: Any, filters: Optional[Sequence[Filter]] = None) -> bool:
    """Evaluate filter conditions against a record (mapping or object)."""
    for item in filters or ():
        if isinstance(item, AnyOf):
            if not any(_matches_condition(record, c) for c in item.conditions):
                return False
        elif not _matches_condition(record, item):
            return False
    return True
