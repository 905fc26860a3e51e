"""Application container class.

This module provides the Application class, which wires the store
components around one Database and manages its lifecycle.

Use create_application() from liteschema.app to create a properly
configured instance.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..core.types import ConflictMode, MigrationReport, Record
from ..store.migrations import MigrationRunner, discover_migrations
from ..store.options import VersionStore
from ..store.query import QueryFacade
from ..store.records import RecordWriter

if TYPE_CHECKING:
    from ..core.config import Config
    from ..core.types import Migration
    from ..store.database import Database


class Application:
    """Application container with wired components and lifecycle management.

    Attributes:
        versions: VersionStore for the schema version and config entries.
        query: QueryFacade for reads and plain statements.
        records: RecordWriter for upserts.

    Example:
        with create_application(config) as app:
            app.migrate()
            contacts = app.query_all("SELECT * FROM contacts")
    """

    def __init__(
        self,
        db: "Database",
        config: "Config",
        migrations: "list[Migration] | None" = None,
    ):
        """Initialize Application around a connected database.

        Args:
            db: Database instance.
            config: Application configuration.
            migrations: Candidate migrations. When omitted they are discovered
                from config.migrations_dir on first use.
        """
        self._db = db
        self._config = config
        self._migrations = migrations
        self._runner: MigrationRunner | None = None

        self.versions = VersionStore(db)
        self.query = QueryFacade(db)
        self.records = RecordWriter(db)

    @property
    def db(self) -> "Database":
        """Get database instance."""
        return self._db

    @property
    def config(self) -> "Config":
        """Get application configuration."""
        return self._config

    @property
    def migrations(self) -> MigrationRunner:
        """Get the migration runner, discovering migrations if needed."""
        if self._runner is None:
            migrations = self._migrations
            if migrations is None:
                migrations = []
                if self._config.migrations_dir is not None:
                    migrations = discover_migrations(
                        self._config.migrations_dir, self._config.migration.pattern
                    )
            self._runner = MigrationRunner(
                self._db,
                migrations,
                versions=self.versions,
                vacuum=self._config.migration.vacuum,
            )
        return self._runner

    def migrate(self) -> MigrationReport:
        """Migrate the database to the latest version."""
        return self.migrations.migrate()

    def query_all(self, sql: str, *params: Any) -> list[Record]:
        return self.query.query_all(sql, *params)

    def query_record(self, sql: str, *params: Any) -> Record | None:
        return self.query.query_record(sql, *params)

    def query_value(self, sql: str, *params: Any) -> Any:
        return self.query.query_value(sql, *params)

    def query_key_value_list(self, sql: str, *params: Any) -> dict[Any, Any]:
        return self.query.query_key_value_list(sql, *params)

    def query_value_list(self, sql: str, *params: Any) -> list[Any]:
        return self.query.query_value_list(sql, *params)

    def exec(self, sql: str, *params: Any) -> int:
        return self.query.exec(sql, *params)

    def save_record(
        self,
        table: str,
        data: Mapping[str, Any],
        conflict: ConflictMode | str = ConflictMode.OVERWRITE,
    ) -> Record | None:
        return self.records.save_record(table, data, conflict)

    def get_config(self, key: str, default: Any = None) -> Any:
        return self.versions.get_config(key, default)

    def set_config(self, key: str, value: Any) -> None:
        self.versions.set_config(key, value)

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def __enter__(self) -> "Application":
        """Enter context."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context and close the database."""
        self.close()
