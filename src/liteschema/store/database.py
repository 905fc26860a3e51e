"""SQLite database connection manager for liteschema."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

from ..core.exceptions import DatabaseError, StatementError
from .params import normalize_params

MEMORY = ":memory:"

# Everything the driver raises while preparing, binding or running a statement.
# sqlite3.Warning covers "You can only execute one statement at a time" on
# interpreters before 3.12, ValueError/OverflowError cover rejected bindings.
_STATEMENT_ERRORS = (sqlite3.Error, sqlite3.Warning, ValueError, OverflowError)


def _statement_error(error: Exception) -> StatementError:
    return StatementError(
        str(error),
        code=getattr(error, "sqlite_errorcode", None),
        name=getattr(error, "sqlite_errorname", None),
    )


def iter_statements(script: str) -> Iterator[str]:
    """Split a SQL script into complete statements.

    Uses sqlite3.complete_statement so semicolons inside string literals,
    comments and trigger bodies do not end a statement. A trailing
    statement without a semicolon is yielded as is.

    Args:
        script: SQL text containing zero or more statements.

    Yields:
        Each statement, including its terminating semicolon.
    """
    buffer: list[str] = []
    for char in script:
        buffer.append(char)
        if char == ";":
            candidate = "".join(buffer)
            if sqlite3.complete_statement(candidate):
                yield candidate
                buffer = []
    rest = "".join(buffer)
    if rest.strip():
        yield rest


class Database:
    """SQLite database connection manager.

    Owns exactly one connection. The connection runs in autocommit mode;
    transactions are opened explicitly with transaction().

    Example:
        with Database(Path("app.db")) as db:
            db.execute("INSERT INTO t (name) VALUES (?)", "x")
    """

    def __init__(
        self,
        path: Path | str,
        *,
        timeout: float = 10.0,
        foreign_keys: bool = True,
        wal: bool = True,
    ):
        """Initialize database with path.

        Args:
            path: Path to the SQLite database file, or ":memory:".
            timeout: Seconds to wait for a lock before failing.
            foreign_keys: Enable foreign key enforcement on connect.
            wal: Try to switch the journal to write-ahead logging on connect.
        """
        self.path = path if path == MEMORY else Path(path)
        self.timeout = timeout
        self.foreign_keys = foreign_keys
        self.wal = wal
        self._connection: sqlite3.Connection | None = None
        self._owns_connection = True
        self._savepoints = 0

    @classmethod
    def from_connection(cls, connection: sqlite3.Connection) -> "Database":
        """Wrap an already open connection.

        The connection is used as is: no pragmas are applied and its
        transaction mode is left untouched. It stays owned by the caller;
        close() only detaches it.

        Args:
            connection: Open sqlite3 connection.

        Returns:
            Database using the given connection.
        """
        db = cls(MEMORY)
        db._connection = connection
        db._owns_connection = False
        return db

    @property
    def connection(self) -> sqlite3.Connection:
        """Get the open connection.

        Raises:
            DatabaseError: If the database is not connected.
        """
        if not self._connection:
            raise DatabaseError("Database not connected")
        return self._connection

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    @property
    def in_transaction(self) -> bool:
        return self.connection.in_transaction

    def connect(self) -> None:
        """Open the connection and apply the bootstrap pragmas."""
        if self._connection:
            return

        try:
            if isinstance(self.path, Path):
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(
                str(self.path),
                timeout=self.timeout,
                isolation_level=None,
            )
            self._owns_connection = True
            self._connection.row_factory = sqlite3.Row
            if self.foreign_keys:
                self._connection.execute("PRAGMA foreign_keys = ON")
            if self.wal:
                self._enable_wal()
        except Exception as e:
            self._connection = None
            raise DatabaseError(f"Failed to connect to database: {e}") from e

        logger.debug(f"Connected to database: {self.path}")

    def close(self) -> None:
        """Close database connection.

        A connection passed to from_connection() is detached, not closed.
        """
        if self._connection and not self._owns_connection:
            self._connection = None
            return
        if self._connection:
            try:
                self._connection.close()
            except Exception as e:
                raise DatabaseError(f"Failed to close database: {e}") from e
            finally:
                self._connection = None

    def __enter__(self) -> "Database":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def execute(self, sql: str, *params: Any) -> sqlite3.Cursor:
        """Execute a SQL statement.

        Args:
            sql: SQL statement with positional ``?`` placeholders.
            *params: Values to bind, flat or as a single list/tuple.

        Returns:
            The executed cursor. The caller is responsible for closing it.

        Raises:
            DatabaseError: If the database is not connected.
            StatementError: If preparation or execution fails.
        """
        cursor = self.connection.cursor()
        self._run(cursor, sql, params)
        return cursor

    @contextmanager
    def cursor(self, sql: str, *params: Any) -> Iterator[sqlite3.Cursor]:
        """Execute a statement and close its cursor when the block exits.

        Rows are fetched as plain tuples so callers can pair them with
        ``cursor.description`` regardless of the connection's row factory.

        Yields:
            The executed cursor.
        """
        cursor = self.connection.cursor()
        cursor.row_factory = None
        try:
            self._run(cursor, sql, params)
            yield cursor
        finally:
            cursor.close()

    def executescript(self, sql: str) -> None:
        """Execute multiple SQL statements.

        Outside a transaction the script is handed to the driver in one
        go. Inside a transaction the statements are run one at a time so
        they stay part of it (the driver's executescript commits first).

        Args:
            sql: SQL script with multiple statements.

        Raises:
            StatementError: If any statement fails.
        """
        connection = self.connection
        if not connection.in_transaction:
            try:
                connection.executescript(sql)
            except _STATEMENT_ERRORS as e:
                raise _statement_error(e) from e
            return

        for statement in iter_statements(sql):
            self.execute(statement).close()

    @contextmanager
    def transaction(self) -> Iterator["Database"]:
        """Context manager for database transactions.

        Commits when the block completes, rolls back and re-raises when it
        raises. When a transaction is already open a savepoint is used, so
        only the inner block is undone on failure.

        Yields:
            This database.
        """
        connection = self.connection
        if connection.in_transaction:
            with self._savepoint():
                yield self
            return

        self.execute("BEGIN").close()
        try:
            yield self
        except BaseException:
            if connection.in_transaction:
                connection.rollback()
            raise

        try:
            connection.commit()
        except _STATEMENT_ERRORS as e:
            if connection.in_transaction:
                connection.rollback()
            raise _statement_error(e) from e

    def vacuum(self) -> None:
        """Rebuild the database file, reclaiming free pages."""
        logger.debug(f"Vacuuming database: {self.path}")
        self.execute("VACUUM").close()

    def _run(self, cursor: sqlite3.Cursor, sql: str, params: tuple[Any, ...]) -> None:
        try:
            cursor.execute(sql, normalize_params(params))
        except _STATEMENT_ERRORS as e:
            cursor.close()
            raise _statement_error(e) from e

    @contextmanager
    def _savepoint(self) -> Iterator[None]:
        self._savepoints += 1
        name = f"liteschema_{self._savepoints}"
        self.execute(f"SAVEPOINT {name}").close()
        try:
            yield
        except BaseException:
            self.execute(f"ROLLBACK TO SAVEPOINT {name}").close()
            self.execute(f"RELEASE SAVEPOINT {name}").close()
            raise
        self.execute(f"RELEASE SAVEPOINT {name}").close()

    def _enable_wal(self) -> None:
        """Switch to write-ahead logging, ignoring engines that refuse."""
        try:
            row = self.connection.execute("PRAGMA journal_mode=WAL").fetchone()
            logger.debug(f"Journal mode: {row[0] if row else 'unknown'}")
        except sqlite3.Error as e:
            logger.debug(f"WAL not available, keeping default journal mode: {e}")
