"""Repository for event data access."""
import logging
import sqlite3
from typing import Any, Dict, List, Tuple

from ..columns import ColumnKey, ColumnSelection
from ..errors import DataAccessError
from ..filters import FilterSet
from ..models import Event, format_timestamp, parse_timestamp
from .connection import Database
from .query_builder import MAX_OFFSET, build_count_query, build_select_query, offset_for_page

logger = logging.getLogger(__name__)


class EventRepository:
    """Reads pages of events from the store and records new ones."""

    def __init__(self, database: Database) -> None:
        self.database = database

    def count(self, filters: FilterSet) -> int:
        """Count events matching the filters."""
        with self.database.read_transaction() as conn:
            return self._count(conn, filters)

    def fetch_page(self, columns: ColumnSelection, filters: FilterSet,
                   page: int, page_size: int) -> List[Event]:
        """Fetch one page of matching events, newest first."""
        with self.database.read_transaction() as conn:
            return self._fetch(conn, columns, filters, page, page_size)

    def fetch_page_with_count(self, columns: ColumnSelection, filters: FilterSet,
                              page: int, page_size: int) -> Tuple[List[Event], int]:
        """
        Count matching events and fetch one page of them.

        Both queries share one connection and one read transaction; the
        connection is released before the caller renders anything.

        Returns:
            Tuple of (events on the page, total matching events)

        Raises:
            DataAccessError: if the store is unreachable, a query fails, or
                a row cannot be mapped to an Event
        """
        with self.database.read_transaction() as conn:
            total = self._count(conn, filters)
            events = self._fetch(conn, columns, filters, page, page_size)
        logger.debug("Fetched %d of %d events (page %d)", len(events), total, page)
        return events, total

    def insert(self, event: Event) -> int:
        """Insert an event and return its store-assigned id."""
        if event.timestamp is None:
            raise ValueError("event timestamp is required")
        try:
            with self.database.connection() as conn:
                cur = conn.execute(
                    "INSERT INTO events (name, description, timestamp, source, severity) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (event.name, event.description, format_timestamp(event.timestamp),
                     event.source, event.severity)
                )
                return int(cur.lastrowid or 0)
        except sqlite3.Error as e:
            raise DataAccessError("failed to insert event") from e

    def _count(self, conn: sqlite3.Connection, filters: FilterSet) -> int:
        query = build_count_query(filters)
        row = conn.execute(query.text, query.params).fetchone()
        return int(row[0])

    def _fetch(self, conn: sqlite3.Connection, columns: ColumnSelection,
               filters: FilterSet, page: int, page_size: int) -> List[Event]:
        offset = offset_for_page(page, page_size)
        if offset > MAX_OFFSET:
            # Far past any table SQLite can hold
            return []
        query = build_select_query(columns, filters, page_size, offset)
        rows = conn.execute(query.text, query.params).fetchall()
        return [self._row_to_event(row, columns) for row in rows]

    @staticmethod
    def _row_to_event(row: sqlite3.Row, columns: ColumnSelection) -> Event:
        """Map a row to an Event, filling only the projected columns."""
        values: Dict[str, Any] = {}
        for col in columns:
            raw = row[col.storage_field]
            try:
                if col.key is ColumnKey.TIMESTAMP:
                    values[col.key.value] = parse_timestamp(raw)
                elif col.key is ColumnKey.ID:
                    values[col.key.value] = int(raw)
                else:
                    values[col.key.value] = "" if raw is None else str(raw)
            except (AttributeError, TypeError, ValueError) as e:
                raise DataAccessError(
                    f"cannot map {col.storage_field}={raw!r} to an event"
                ) from e
        return Event(**values)
