"""SQLite database connection manager for advsearch."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ..core.exceptions import DatabaseError
from ..core.types import TableNames
from .schema import get_schema

MEMORY = ":memory:"


class Database:
    """SQLite database connection manager."""

    def __init__(self, path: Path | str, tables: TableNames | None = None):
        """Initialize database with path.

        Args:
            path: Path to the SQLite database file, or ":memory:".
            tables: Table names to create; default "wp_" prefix.
        """
        self.path = path
        self.tables = tables or TableNames.from_prefix()
        self._connection: sqlite3.Connection | None = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def connect(self) -> None:
        """Open the connection and create the schema."""
        try:
            if str(self.path) != MEMORY:
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(str(self.path))
            self._connection.row_factory = sqlite3.Row
            self._connection.execute("PRAGMA foreign_keys = ON")
            self._init_schema()
        except Exception as e:
            raise DatabaseError(f"Failed to connect to database: {e}") from e

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            connection, self._connection = self._connection, None
            connection.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Context manager for database transactions.

        Yields:
            A cursor for executing SQL statements.

        Raises:
            DatabaseError: If connection is not available or transaction fails.
        """
        connection = self._require_connection()
        cursor = connection.cursor()
        try:
            yield cursor
            connection.commit()
        except Exception as e:
            connection.rollback()
            raise DatabaseError(f"Transaction failed: {e}") from e
        finally:
            cursor.close()

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Execute a SQL query.

        Raises:
            DatabaseError: If connection is not available or query fails.
        """
        connection = self._require_connection()
        try:
            return connection.execute(sql, params)
        except Exception as e:
            raise DatabaseError(f"Query execution failed: {e}") from e

    def _require_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise DatabaseError("Database not connected")
        return self._connection

    def _init_schema(self) -> None:
        with self.transaction() as cursor:
            cursor.executescript(get_schema(self.tables))
