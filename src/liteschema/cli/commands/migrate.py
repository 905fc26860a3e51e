"""Migrate and status commands for liteschema CLI."""

from ...app import create_application
from ...core.config import Config
from ...core.exceptions import MigrationError
from ...core.types import MigrationReport, MigrationStatus


def handle_migrate(args, config: Config) -> None:
    """Handle migrate command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    with create_application(config) as app:
        try:
            report = app.migrate()
        except MigrationError as e:
            if e.applied:
                print(f"Applied: {', '.join(str(v) for v in e.applied)}")
            raise
        _print_report(report)


def handle_status(args, config: Config) -> None:
    """Handle status command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    with create_application(config) as app:
        runner = app.migrations
        current = runner.get_version()
        pending = runner.get_pending_migrations(current)

        print("Schema Status")
        print("=" * 50)
        print(f"Database: {config.db_path}")
        print(f"Migrations: {config.migrations_dir or '-'}")
        print(f"Current version: {current}")
        print(f"Latest version: {runner.get_latest_version()}")
        print()

        if pending:
            print("Pending migrations:")
            for migration in pending:
                print(f"  {migration.version:>4}  {migration.origin}")
        else:
            print("Up to date.")


def _print_report(report: MigrationReport) -> None:
    if report.status is MigrationStatus.UP_TO_DATE:
        print(f"Database is up to date at version {report.to_version}")
        return
    print(
        f"Migrated from version {report.from_version} to {report.to_version} "
        f"({len(report.applied)} migration(s))"
    )
