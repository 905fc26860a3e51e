"""Schema version and configuration entries stored in the opt table."""

from typing import Any

from loguru import logger

from ..core.exceptions import BootstrapError, StatementError, VersionError
from .database import Database

OPT_TABLE = "opt"
VERSION_KEY = "dbversion"


class VersionStore:
    """Reads and writes entries of the reserved ``opt`` table.

    The table holds one row per key. The schema version is the entry
    stored under ``dbversion``; every other key is free for application
    configuration. The table is created on first use.
    """

    def __init__(self, db: Database):
        """Initialize with database connection.

        Args:
            db: Database instance to use for operations.
        """
        self.db = db

    def table_exists(self) -> bool:
        """Check the catalog for the opt table."""
        with self.db.cursor(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
            OPT_TABLE,
        ) as cursor:
            return cursor.fetchone() is not None

    def ensure_table(self) -> bool:
        """Create and seed the opt table if it does not exist.

        Returns:
            True if the table was missing when checked. Another connection
            may have created it in between; its version row is kept.

        Raises:
            BootstrapError: If the table is missing and cannot be created.
        """
        if self.table_exists():
            return False

        logger.info(f"Creating {OPT_TABLE} table, database starts at version 0")
        try:
            with self.db.transaction():
                self.db.execute(
                    f"CREATE TABLE IF NOT EXISTS {OPT_TABLE} "
                    "(conf TEXT NOT NULL PRIMARY KEY, val DEFAULT '')"
                ).close()
                self.db.execute(
                    f"INSERT OR IGNORE INTO {OPT_TABLE} (conf, val) VALUES (?, ?)",
                    VERSION_KEY,
                    0,
                ).close()
        except StatementError as e:
            raise BootstrapError(f"Failed to create {OPT_TABLE} table: {e}") from e
        return True

    def current_version(self) -> int:
        """Get the current schema version.

        A database without the opt table is at version 0; the table is
        created on the way.

        Returns:
            The stored schema version.

        Raises:
            BootstrapError: If the opt table is missing and cannot be created.
            VersionError: If the stored version is not an integer.
            StatementError: If reading the version fails.
        """
        self.ensure_table()
        value = self._read(VERSION_KEY)
        if value is None or value == "":
            return 0
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise VersionError(f"Stored schema version is not an integer: {value!r}") from e

    def set_version(self, version: int) -> None:
        """Store the schema version.

        Called by the migration runner inside the migration's transaction.

        Args:
            version: New version number.
        """
        self._write(VERSION_KEY, int(version))

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get a configuration value.

        Args:
            key: Config name.
            default: Returned when the key is not set or stored as NULL.

        Returns:
            The stored value or default.
        """
        self.ensure_table()
        value = self._read(key)
        return default if value is None else value

    def set_config(self, key: str, value: Any) -> None:
        """Set a configuration value, replacing any previous one."""
        self.ensure_table()
        self._write(key, value)

    def delete_config(self, key: str) -> bool:
        """Remove a configuration entry.

        Returns:
            True if an entry was removed.

        Raises:
            ValueError: If key is the schema version key.
        """
        if key == VERSION_KEY:
            raise ValueError(f"{VERSION_KEY} is managed by the migration runner")
        self.ensure_table()
        with self.db.cursor(f"DELETE FROM {OPT_TABLE} WHERE conf = ?", key) as cursor:
            return cursor.rowcount > 0

    def _read(self, key: str) -> Any:
        with self.db.cursor(f"SELECT val FROM {OPT_TABLE} WHERE conf = ?", key) as cursor:
            row = cursor.fetchone()
        return row[0] if row else None

    def _write(self, key: str, value: Any) -> None:
        self.db.execute(
            f"REPLACE INTO {OPT_TABLE} (conf, val) VALUES (?, ?)", key, value
        ).close()
