"""Insert-or-replace / insert-or-ignore with read-back of the stored row."""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from ..core.types import ConflictMode, Record
from .database import Database
from .query import QueryFacade

_COMMANDS = {
    ConflictMode.OVERWRITE: "REPLACE",
    ConflictMode.IGNORE: "INSERT OR IGNORE",
}


def quote_identifier(name: str) -> str:
    """Quote a table or column name for use in SQL."""
    return '"' + str(name).replace('"', '""') + '"'


class RecordWriter:
    """Writes whole rows from column/value mappings."""

    def __init__(self, db: Database):
        """Initialize with database connection.

        Args:
            db: Database instance to use for operations.
        """
        self.db = db
        self._query = QueryFacade(db)

    def build_statement(
        self,
        table: str,
        columns: list[str],
        conflict: ConflictMode | str = ConflictMode.OVERWRITE,
    ) -> str:
        """Build the parameterized insert statement for the given columns."""
        command = _COMMANDS[ConflictMode(conflict)]
        column_list = ", ".join(quote_identifier(c) for c in columns)
        placeholders = ", ".join("?" for _ in columns)
        return (
            f"{command} INTO {quote_identifier(table)} "
            f"({column_list}) VALUES ({placeholders})"
        )

    def save_record(
        self,
        table: str,
        data: Mapping[str, Any],
        conflict: ConflictMode | str = ConflictMode.OVERWRITE,
    ) -> Record | None:
        """Insert a row, replacing or ignoring on a uniqueness conflict.

        With OVERWRITE a conflicting row is replaced completely (columns
        missing from data get their defaults). With IGNORE nothing happens
        on conflict.

        Args:
            table: Table to write to.
            data: Column name to value mapping, must not be empty.
            conflict: Conflict resolution, OVERWRITE or IGNORE.

        Returns:
            The stored row as read back from the table, including defaults
            and trigger effects, or None if nothing was written.

        Raises:
            ValueError: If data is empty or conflict is unknown.
            StatementError: If the table or a column does not exist, or a
                non-uniqueness constraint fails.
        """
        if not data:
            raise ValueError("save_record requires at least one column")

        columns = list(data.keys())
        sql = self.build_statement(table, columns, conflict)

        with self.db.cursor(sql, [data[c] for c in columns]) as cursor:
            written = cursor.rowcount
            row_id = cursor.lastrowid

        if written <= 0:
            logger.debug(f"save_record into {table!r} ignored a conflicting row")
            return None

        return self._query.query_record(
            f"SELECT * FROM {quote_identifier(table)} WHERE rowid = ?", row_id
        )
