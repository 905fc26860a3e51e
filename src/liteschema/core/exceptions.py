"""Custom exceptions for liteschema."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Migration


class LiteSchemaError(Exception):
    """Base exception for all liteschema errors."""

    pass


class DatabaseError(LiteSchemaError):
    """Database connection is unavailable or could not be managed."""

    pass


class StatementError(DatabaseError):
    """A statement failed to prepare or execute.

    Preparation and execution failures are reported as this one kind.
    The engine's numeric result code and its symbolic name are kept when
    the driver exposes them.
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        name: str | None = None,
    ):
        """Initialize with message and engine error code.

        Args:
            message: Error message reported by the engine.
            code: SQLite extended result code, if known.
            name: Symbolic name of the result code (e.g. SQLITE_CONSTRAINT).
        """
        self.code = code
        self.name = name
        super().__init__(message)


class BootstrapError(DatabaseError):
    """The reserved configuration table could not be created or seeded."""

    pass


class VersionError(DatabaseError):
    """The stored schema version is not an integer."""

    pass


class ShapeMismatchError(LiteSchemaError):
    """A query returned a different number of columns than required."""

    def __init__(self, operation: str, expected: int, actual: int):
        self.operation = operation
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{operation} expects a query that returns exactly {expected} "
            f"column(s), got {actual}"
        )


class MigrationError(LiteSchemaError):
    """Applying a migration failed.

    The transaction of the failing migration has been rolled back and the
    stored schema version still points at the last committed migration.
    """

    def __init__(
        self,
        message: str,
        migration: "Migration | None" = None,
        applied: list[int] | None = None,
    ):
        """Initialize with migration context.

        Args:
            message: Description of the failure.
            migration: The migration that failed, if any.
            applied: Versions committed during the same run before the failure.
        """
        self.migration = migration
        self.applied = applied or []
        super().__init__(message)

    @property
    def version(self) -> int | None:
        """Version of the failed migration."""
        return self.migration.version if self.migration else None

    @property
    def origin(self) -> str | None:
        """Origin identifier (usually the file name) of the failed migration."""
        return self.migration.origin if self.migration else None


class DuplicateMigrationError(MigrationError, ValueError):
    """Two migrations claim the same version."""

    def __init__(self, version: int, origins: list[str]):
        self.duplicate_version = version
        self.origins = origins
        super().__init__(
            f"Duplicate migration version {version}: {', '.join(origins)}"
        )

    @property
    def version(self) -> int | None:
        return self.duplicate_version
