"""Query helpers that execute statements and shape their results."""

from __future__ import annotations

import re
import sqlite3
from typing import Any

from ..core.exceptions import ShapeMismatchError
from ..core.types import Record
from .database import Database

_INSERT_RE = re.compile(r"^\s*INSERT\b", re.IGNORECASE)


def column_names(cursor: sqlite3.Cursor) -> list[str]:
    """Column names of an executed cursor, empty for non-queries."""
    if cursor.description is None:
        return []
    return [column[0] for column in cursor.description]


def row_to_record(columns: list[str], row: tuple) -> Record:
    return dict(zip(columns, row))


class QueryFacade:
    """Runs statements and returns rows in one of several shapes.

    Every method takes the SQL text followed by its parameters, either
    flat or as a single list: ``query_all(sql, 1, 2)`` and
    ``query_all(sql, [1, 2])`` are equivalent. Cursors are closed before
    the method returns.
    """

    def __init__(self, db: Database):
        """Initialize with database connection.

        Args:
            db: Database instance to use for operations.
        """
        self.db = db

    def execute(self, sql: str, *params: Any) -> sqlite3.Cursor:
        """Execute a statement and return its cursor.

        Be sure to close the cursor yourself.
        """
        return self.db.execute(sql, *params)

    def query_all(self, sql: str, *params: Any) -> list[Record]:
        """Get all rows.

        Returns:
            List of records, empty if the query returned no rows.
        """
        with self.db.cursor(sql, *params) as cursor:
            columns = column_names(cursor)
            return [row_to_record(columns, row) for row in cursor.fetchall()]

    def query_record(self, sql: str, *params: Any) -> Record | None:
        """Get the first row.

        Returns:
            The first record, or None if there are no rows.
        """
        with self.db.cursor(sql, *params) as cursor:
            columns = column_names(cursor)
            row = cursor.fetchone()
        if row is None or not columns:
            return None
        return row_to_record(columns, row)

    def query_value(self, sql: str, *params: Any) -> Any:
        """Get the first column of the first row, or None without rows."""
        with self.db.cursor(sql, *params) as cursor:
            row = cursor.fetchone()
        if not row:
            return None
        return row[0]

    def query_key_value_list(self, sql: str, *params: Any) -> dict[Any, Any]:
        """Map the first column to the second across all rows.

        An empty result gives an empty dict whatever its columns.

        Raises:
            ShapeMismatchError: If rows are returned that do not have
                exactly two columns.
        """
        with self.db.cursor(sql, *params) as cursor:
            rows = cursor.fetchall()
            if not rows:
                return {}
            self._require_columns(cursor, 2, "query_key_value_list")
            return {key: value for key, value in rows}

    def query_value_list(self, sql: str, *params: Any) -> list[Any]:
        """Get the values of a single column across all rows.

        Raises:
            ShapeMismatchError: If the query does not return exactly one column.
        """
        with self.db.cursor(sql, *params) as cursor:
            self._require_columns(cursor, 1, "query_value_list")
            return [row[0] for row in cursor.fetchall()]

    def exec(self, sql: str, *params: Any) -> int:
        """Execute a statement and return metadata.

        Returns the id of the new row for an INSERT that inserted
        something, the number of affected rows otherwise.
        """
        with self.db.cursor(sql, *params) as cursor:
            count = cursor.rowcount
            last_id = cursor.lastrowid
        if count > 0 and _INSERT_RE.match(sql):
            return int(last_id or 0)
        return max(count, 0)

    def exec_insert(self, sql: str, *params: Any) -> int:
        """Execute an insert and return the id of the inserted row.

        Returns:
            The new row id, or 0 if no row was inserted.
        """
        with self.db.cursor(sql, *params) as cursor:
            if cursor.rowcount <= 0:
                return 0
            return int(cursor.lastrowid or 0)

    def exec_affected(self, sql: str, *params: Any) -> int:
        """Execute a statement and return the number of affected rows."""
        with self.db.cursor(sql, *params) as cursor:
            return max(cursor.rowcount, 0)

    @staticmethod
    def _require_columns(cursor: sqlite3.Cursor, expected: int, operation: str) -> None:
        actual = len(column_names(cursor))
        if actual != expected:
            raise ShapeMismatchError(operation, expected, actual)
