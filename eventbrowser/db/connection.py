"""Database connection management."""
import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from ..config import DB_TIMEOUT
from ..errors import DataAccessError

logger = logging.getLogger(__name__)


class Database:
    """
    Handle on the SQLite event store.

    Built once at startup and shared by every request. Each request borrows
    its own connection through connection() or read_transaction(); nothing
    mutable is shared between requests.
    """

    def __init__(self, path: str, timeout: float = DB_TIMEOUT) -> None:
        self.path = path
        self.timeout = timeout

    def _connect(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.path, timeout=self.timeout)
        except sqlite3.Error as e:
            raise DataAccessError(f"cannot open event store at {self.path}") from e
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection, committing on success and always closing it."""
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @contextmanager
    def read_transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Yield a connection inside a single read transaction.

        Queries issued within see one snapshot of the table, so a count and
        the page fetched after it agree with each other.
        """
        conn = self._connect()
        try:
            conn.execute("BEGIN")
            yield conn
        except sqlite3.Error as e:
            raise DataAccessError("event store query failed") from e
        finally:
            try:
                conn.rollback()
            finally:
                conn.close()

    def ensure_schema(self) -> None:
        """Ensure database directory and table exist."""
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        try:
            with self.connection() as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS events (
                        id INTEGER PRIMARY KEY,
                        name TEXT NOT NULL,
                        timestamp TEXT NOT NULL,
                        description TEXT,
                        source TEXT,
                        severity TEXT
                    )
                """)
                # Create index for timestamp-based queries
                conn.execute("""
                    CREATE INDEX IF NOT EXISTS idx_events_timestamp
                    ON events(timestamp)
                """)
        except sqlite3.Error as e:
            raise DataAccessError(f"cannot create schema in {self.path}") from e
        logger.info("Event store ready at %s", self.path)
