"""Tests for database connection and management."""

import sqlite3
from pathlib import Path

import pytest

from liteschema.core.exceptions import DatabaseError, StatementError
from liteschema.store.database import Database, iter_statements


class TestDatabaseConnection:
    """Tests for database connection lifecycle."""

    def test_connect_creates_database_file(self, test_db_path: Path):
        """Database file should be created on connect."""
        db = Database(test_db_path)
        db.connect()

        assert test_db_path.exists()
        db.close()

    def test_connect_creates_parent_directories(self, tmp_path: Path):
        """Connect should create parent directories if needed."""
        db_path = tmp_path / "subdir" / "nested" / "test.db"
        db = Database(db_path)
        db.connect()

        assert db_path.exists()
        db.close()

    def test_close_without_connect(self, test_db_path: Path):
        """Close should not raise if not connected."""
        db = Database(test_db_path)
        db.close()

    def test_double_connect(self, test_db_path: Path):
        """Connecting twice should work without error."""
        db = Database(test_db_path)
        db.connect()
        db.connect()
        assert db.is_connected
        db.close()

    def test_close_clears_connection(self, test_db_path: Path):
        """Close should clear the connection."""
        db = Database(test_db_path)
        db.connect()
        db.close()

        with pytest.raises(DatabaseError, match="not connected"):
            db.execute("SELECT 1")

    def test_context_manager_connects_and_closes(self, test_db_path: Path):
        """The with statement should connect on entry and close on exit."""
        with Database(test_db_path) as db:
            assert db.is_connected
        assert not db.is_connected

    def test_memory_database(self):
        """An in-memory database should not touch the filesystem."""
        with Database(":memory:") as db:
            db.execute("CREATE TABLE t (x)").close()
            db.execute("INSERT INTO t VALUES (1)").close()
            assert db.execute("SELECT x FROM t").fetchone()[0] == 1

    def test_connect_failure_raises_database_error(self, tmp_path: Path):
        """A path that cannot be opened should raise DatabaseError."""
        blocker = tmp_path / "file"
        blocker.write_text("x")

        db = Database(blocker / "test.db")
        with pytest.raises(DatabaseError, match="Failed to connect"):
            db.connect()
        assert not db.is_connected


class TestDatabasePragmas:
    """Tests for pragmas applied on connect."""

    def test_foreign_keys_enabled(self, db: Database):
        """Foreign key enforcement should be on."""
        assert db.execute("PRAGMA foreign_keys").fetchone()[0] == 1

    def test_foreign_keys_can_be_disabled(self, test_db_path: Path):
        """foreign_keys=False should leave enforcement off."""
        with Database(test_db_path, foreign_keys=False) as db:
            assert db.execute("PRAGMA foreign_keys").fetchone()[0] == 0

    def test_wal_enabled(self, db: Database):
        """File databases should use write-ahead logging."""
        assert db.execute("PRAGMA journal_mode").fetchone()[0] == "wal"

    def test_wal_can_be_disabled(self, test_db_path: Path):
        """wal=False should keep the default journal mode."""
        with Database(test_db_path, wal=False) as db:
            assert db.execute("PRAGMA journal_mode").fetchone()[0] == "delete"

    def test_wal_unsupported_is_ignored(self):
        """Databases without WAL support should still connect."""
        with Database(":memory:") as db:
            assert db.execute("PRAGMA journal_mode").fetchone()[0] == "memory"

    def test_autocommit_mode(self, test_db_path: Path):
        """Statements outside transaction() should be committed immediately."""
        with Database(test_db_path) as db:
            db.execute("CREATE TABLE t (x)").close()
            db.execute("INSERT INTO t VALUES (1)").close()
            assert not db.in_transaction

        with Database(test_db_path) as db:
            assert db.execute("SELECT COUNT(*) FROM t").fetchone()[0] == 1


class TestDatabaseExecute:
    """Tests for statement execution."""

    def test_flat_parameters(self, db: Database):
        """Parameters may be passed flat."""
        row = db.execute("SELECT ?, ?", 1, "a").fetchone()
        assert tuple(row) == (1, "a")

    def test_list_parameter_is_unwrapped(self, db: Database):
        """A single list argument should supply all parameters."""
        row = db.execute("SELECT ?, ?", [1, "a"]).fetchone()
        assert tuple(row) == (1, "a")

    def test_execute_returns_named_rows(self, db: Database):
        """Rows from execute() should be addressable by column name."""
        row = db.execute("SELECT 1 AS one").fetchone()
        assert row["one"] == 1

    def test_missing_table_raises_statement_error(self, db: Database):
        """Preparation errors should surface as StatementError."""
        with pytest.raises(StatementError, match="no such table") as exc_info:
            db.execute("SELECT * FROM non_existent_table")

        assert exc_info.value.code == sqlite3.SQLITE_ERROR
        assert exc_info.value.name == "SQLITE_ERROR"
        assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)

    def test_syntax_error_raises_statement_error(self, db: Database):
        """Syntax errors should surface as StatementError."""
        with pytest.raises(StatementError, match="syntax error"):
            db.execute("SELEKT 1")

    def test_wrong_binding_count_raises_statement_error(self, db: Database):
        """Binding failures should surface as StatementError, not ProgrammingError."""
        with pytest.raises(StatementError):
            db.execute("SELECT ?", 1, 2)

    def test_multiple_statements_raise_statement_error(self, db: Database):
        """execute() accepts a single statement only."""
        with pytest.raises(StatementError):
            db.execute("SELECT 1; SELECT 2")

    def test_constraint_violation_keeps_engine_code(self, db: Database):
        """Execution errors should carry the engine's extended code."""
        db.execute("CREATE TABLE t (x NOT NULL)").close()

        with pytest.raises(StatementError) as exc_info:
            db.execute("INSERT INTO t VALUES (NULL)")

        assert exc_info.value.code == sqlite3.SQLITE_CONSTRAINT_NOTNULL

    def test_cursor_context_closes_cursor(self, db: Database):
        """cursor() should close its cursor on exit."""
        with db.cursor("SELECT 1") as cursor:
            assert cursor.fetchone() == (1,)

        with pytest.raises(sqlite3.ProgrammingError):
            cursor.fetchone()

    def test_cursor_context_closes_on_error(self, db: Database):
        """cursor() should close its cursor when the block raises."""
        with pytest.raises(RuntimeError):
            with db.cursor("SELECT 1") as cursor:
                raise RuntimeError("boom")

        with pytest.raises(sqlite3.ProgrammingError):
            cursor.fetchone()


class TestDatabaseTransactions:
    """Tests for transaction handling."""

    def test_transaction_commits(self, db: Database):
        """A completed block should be committed."""
        db.execute("CREATE TABLE t (x)").close()
        with db.transaction():
            db.execute("INSERT INTO t VALUES (1)").close()
            assert db.in_transaction

        assert not db.in_transaction
        assert db.execute("SELECT COUNT(*) FROM t").fetchone()[0] == 1

    def test_transaction_rolls_back_on_error(self, db: Database):
        """A failing block should be rolled back and the error re-raised."""
        db.execute("CREATE TABLE t (x)").close()

        with pytest.raises(RuntimeError):
            with db.transaction():
                db.execute("INSERT INTO t VALUES (1)").close()
                raise RuntimeError("boom")

        assert not db.in_transaction
        assert db.execute("SELECT COUNT(*) FROM t").fetchone()[0] == 0

    def test_statement_error_propagates_unchanged(self, db: Database):
        """Statement errors inside a transaction should not be rewrapped."""
        with pytest.raises(StatementError, match="no such table"):
            with db.transaction():
                db.execute("INSERT INTO missing VALUES (1)")

    def test_nested_transaction_uses_savepoint(self, db: Database):
        """A failing inner block should only undo its own changes."""
        db.execute("CREATE TABLE t (x)").close()

        with db.transaction():
            db.execute("INSERT INTO t VALUES (1)").close()
            with pytest.raises(RuntimeError):
                with db.transaction():
                    db.execute("INSERT INTO t VALUES (2)").close()
                    raise RuntimeError("inner")
            db.execute("INSERT INTO t VALUES (3)").close()

        values = [row[0] for row in db.execute("SELECT x FROM t ORDER BY x")]
        assert values == [1, 3]

    def test_executescript_inside_transaction_is_atomic(self, db: Database):
        """Scripts run inside transaction() should roll back as a whole."""
        with pytest.raises(StatementError):
            with db.transaction():
                db.executescript(
                    "CREATE TABLE a (x); INSERT INTO a VALUES (1); INSERT INTO nope VALUES (2);"
                )

        row = db.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'a'"
        ).fetchone()
        assert row is None

    def test_executescript_outside_transaction(self, db: Database):
        """Scripts outside a transaction should run every statement."""
        db.executescript("CREATE TABLE a (x); INSERT INTO a VALUES (1); INSERT INTO a VALUES (2);")
        assert db.execute("SELECT COUNT(*) FROM a").fetchone()[0] == 2

    def test_executescript_error_is_statement_error(self, db: Database):
        """Script failures should surface as StatementError."""
        with pytest.raises(StatementError):
            db.executescript("CREATE TABLE a (x); INSERT INTO nope VALUES (1);")

    def test_from_connection_uses_connection_as_is(self):
        """A wrapped connection should be usable without connect()."""
        conn = sqlite3.connect(":memory:", isolation_level=None)
        db = Database.from_connection(conn)

        db.execute("CREATE TABLE test (id INTEGER PRIMARY KEY, name TEXT)").close()
        db.execute("INSERT INTO test (name) VALUES (?)", "Wrapped").close()

        assert db.connection is conn
        assert conn.execute("SELECT name FROM test").fetchone()[0] == "Wrapped"
        db.close()
        conn.close()

    def test_close_leaves_wrapped_connection_open(self):
        """close() should detach a wrapped connection without closing it."""
        conn = sqlite3.connect(":memory:", isolation_level=None)
        db = Database.from_connection(conn)

        db.close()

        assert not db.is_connected
        assert conn.execute("SELECT 1").fetchone()[0] == 1
        conn.close()


class TestIterStatements:
    """Tests for splitting scripts into statements."""

    def test_splits_on_semicolons(self):
        """Each complete statement should be yielded separately."""
        statements = list(iter_statements("SELECT 1; SELECT 2;"))
        assert [s.strip() for s in statements] == ["SELECT 1;", "SELECT 2;"]

    def test_semicolon_in_literal(self):
        """Semicolons inside string literals should not split."""
        statements = list(iter_statements("INSERT INTO t VALUES ('a;b'); SELECT 1;"))
        assert len(statements) == 2
        assert "'a;b'" in statements[0]

    def test_trigger_body(self):
        """Trigger bodies should stay in one statement."""
        script = """
            CREATE TRIGGER trg AFTER INSERT ON t BEGIN
                UPDATE t SET x = 1;
                UPDATE t SET y = 2;
            END;
            SELECT 1;
        """
        statements = list(iter_statements(script))
        assert len(statements) == 2
        assert statements[0].strip().endswith("END;")

    def test_trailing_statement_without_semicolon(self):
        """A final statement without a semicolon should be kept."""
        statements = list(iter_statements("SELECT 1; SELECT 2"))
        assert statements[-1].strip() == "SELECT 2"

    def test_whitespace_only_rest_is_dropped(self):
        """Trailing whitespace should not produce a statement."""
        assert len(list(iter_statements("SELECT 1;\n\n  "))) == 1
