"""
Builds the parameterized count and page queries for the event listing.

Only storage fields from the column registry and the fixed clause text
below are placed in the SQL text. Every value that came from a request is
passed as a bound parameter.
"""
from typing import Any, List, NamedTuple, Tuple

from ..columns import ColumnSelection
from ..filters import After, Before, Between, FilterSet
from ..models import format_timestamp

TABLE = "events"
TIMESTAMP_FIELD = "timestamp"
SOURCE_FIELD = "source"
SEVERITY_FIELD = "severity"
NAME_FIELD = "name"

# Largest value SQLite can bind as an integer
MAX_OFFSET = 2 ** 63 - 1


class Query(NamedTuple):
    """SQL text and its bound parameters."""
    text: str
    params: Tuple[Any, ...]


def _placeholders(count: int) -> str:
    return ', '.join('?' * count)


def _where_clause(filters: FilterSet) -> Tuple[str, List[Any]]:
    """Return the WHERE clause for a filter set and its parameters."""
    clauses = ["1=1"]
    params: List[Any] = []

    ts = filters.timestamp
    if isinstance(ts, Before):
        clauses.append(f"{TIMESTAMP_FIELD} <= ?")
        params.append(format_timestamp(ts.at))
    elif isinstance(ts, After):
        clauses.append(f"{TIMESTAMP_FIELD} >= ?")
        params.append(format_timestamp(ts.at))
    elif isinstance(ts, Between):
        clauses.append(f"{TIMESTAMP_FIELD} BETWEEN ? AND ?")
        params.extend((format_timestamp(ts.start), format_timestamp(ts.end)))

    if filters.sources:
        clauses.append(f"{SOURCE_FIELD} IN ({_placeholders(len(filters.sources))})")
        params.extend(filters.sources)

    if filters.severity is not None:
        clauses.append(f"{SEVERITY_FIELD} = ?")
        params.append(filters.severity)

    if filters.names:
        clauses.append(f"{NAME_FIELD} IN ({_placeholders(len(filters.names))})")
        params.extend(filters.names)

    return "WHERE " + " AND ".join(clauses), params


def offset_for_page(page: int, page_size: int) -> int:
    """Row offset of a 1-based page."""
    return (page - 1) * page_size


def build_count_query(filters: FilterSet) -> Query:
    """Count the rows matching the filters, regardless of visible columns."""
    where, params = _where_clause(filters)
    return Query(f"SELECT COUNT(*) FROM {TABLE} {where}", tuple(params))


def build_select_query(columns: ColumnSelection, filters: FilterSet,
                       page_size: int, offset: int) -> Query:
    """Select one page of matching rows, newest first."""
    projection = ", ".join(columns.storage_fields)
    where, params = _where_clause(filters)
    text = (
        f"SELECT {projection} FROM {TABLE} {where} "
        f"ORDER BY {TIMESTAMP_FIELD} DESC LIMIT ? OFFSET ?"
    )
    return Query(text, tuple(params) + (page_size, offset))
