"""Database migrations for liteschema.

Migrations are plain SQL scripts with a version number. The applied
version is tracked in the ``opt`` table.

Example:
    from liteschema.store.migrations import MigrationRunner, discover_migrations

    runner = MigrationRunner(db, discover_migrations("schema"))
    report = runner.migrate()
"""

from .discovery import discover_migrations, parse_version
from .runner import MigrationRunner, check_unique_versions

__all__ = [
    "MigrationRunner",
    "check_unique_versions",
    "discover_migrations",
    "parse_version",
]
