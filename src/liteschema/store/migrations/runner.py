"""Database migration runner for liteschema.

The schema version is kept in the opt table under ``dbversion``.
Each migration runs in its own transaction together with the version
update, so a migration is either fully applied and recorded or not at all.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from loguru import logger

from ...core.exceptions import DuplicateMigrationError, MigrationError, StatementError
from ...core.types import Migration, MigrationReport, MigrationStatus
from ..database import Database
from ..options import VersionStore


def check_unique_versions(migrations: Iterable[Migration]) -> None:
    """Reject migration sets that use a version more than once.

    Raises:
        DuplicateMigrationError: For the lowest duplicated version.
    """
    origins: dict[int, list[str]] = defaultdict(list)
    for migration in migrations:
        origins[migration.version].append(migration.origin or repr(migration))
    for version in sorted(origins):
        if len(origins[version]) > 1:
            raise DuplicateMigrationError(version, origins[version])


class MigrationRunner:
    """Applies versioned migrations to a SQLite database.

    Migrations with a version above the stored one are applied in
    ascending order. Applying stops at the first failure; migrations
    committed before it stay applied and the next run resumes at the
    failed one.

    Example:
        runner = MigrationRunner(db, discover_migrations(Path("schema")))
        report = runner.migrate()
        print(f"Applied {len(report.applied)} migrations, now at version {report.to_version}")
    """

    def __init__(
        self,
        db: Database,
        migrations: Iterable[Migration] = (),
        *,
        versions: VersionStore | None = None,
        vacuum: bool = True,
    ):
        """Initialize with database connection and candidate migrations.

        Args:
            db: Database to migrate.
            migrations: Candidate migrations, in any order.
            versions: Version store to use; one is created for db if omitted.
            vacuum: Compact the database file after migrations were applied.
        """
        self.db = db
        self.versions = versions or VersionStore(db)
        self.vacuum = vacuum
        self._migrations = list(migrations)

    def get_version(self) -> int:
        """Get current schema version."""
        return self.versions.current_version()

    def get_migrations(self) -> list[Migration]:
        """Get all candidate migrations, sorted by version.

        Raises:
            DuplicateMigrationError: If two migrations share a version.
        """
        check_unique_versions(self._migrations)
        return sorted(self._migrations, key=lambda m: m.version)

    def get_pending_migrations(self, current: int | None = None) -> list[Migration]:
        """Get migrations that haven't been applied yet.

        Args:
            current: Version to compare against; read from the database if omitted.

        Returns:
            Migrations with version > current, in ascending order.
        """
        migrations = self.get_migrations()
        if current is None:
            current = self.get_version()
        return [m for m in migrations if m.version > current]

    def get_latest_version(self) -> int:
        """Get the latest available migration version, or 0 if none."""
        migrations = self.get_migrations()
        if not migrations:
            return 0
        return migrations[-1].version

    def is_up_to_date(self) -> bool:
        """Check if database is at latest version."""
        return self.get_version() >= self.get_latest_version()

    def migrate(self) -> MigrationReport:
        """Apply all pending migrations.

        Returns:
            Report of the run, UP_TO_DATE when nothing was pending.

        Raises:
            DuplicateMigrationError: If two candidate migrations share a version.
            MigrationError: If a migration fails. Its transaction is rolled
                back and no further migrations are attempted.
        """
        current = self.get_version()
        pending = self.get_pending_migrations(current)

        if not pending:
            logger.debug(f"Database at version {current}, no migrations to apply")
            return MigrationReport(MigrationStatus.UP_TO_DATE, current, current)

        applied: list[int] = []
        for migration in pending:
            logger.info(f"Applying migration {migration.version}: {migration.origin}")
            try:
                self._apply(migration)
            except StatementError as e:
                logger.error(f"Migration {migration.version} ({migration.origin}) failed: {e}")
                raise MigrationError(
                    f"Migration {migration.version} ({migration.origin}) failed: {e}",
                    migration=migration,
                    applied=applied,
                ) from e
            applied.append(migration.version)

        if self.vacuum:
            if self.db.in_transaction:
                # VACUUM cannot run inside the caller's transaction
                logger.debug("Skipping vacuum, a transaction is open")
            else:
                self.db.vacuum()

        logger.info(
            f"Applied {len(applied)} migration(s), database now at version {applied[-1]}"
        )
        return MigrationReport(MigrationStatus.ADVANCED, current, applied[-1], applied)

    run = migrate

    def _apply(self, migration: Migration) -> None:
        with self.db.transaction():
            self.db.executescript(migration.source)
            self.versions.set_version(migration.version)
        logger.debug(f"Migration {migration.version} applied successfully")
