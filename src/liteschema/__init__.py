"""liteschema - versioned SQLite schema migrations and query helpers."""

from .app import Application, create_application
from .core import (
    BootstrapError,
    Config,
    ConflictMode,
    DatabaseError,
    DuplicateMigrationError,
    LiteSchemaError,
    Migration,
    MigrationError,
    MigrationReport,
    MigrationStatus,
    Record,
    ShapeMismatchError,
    StatementError,
    VersionError,
)
from .store import (
    Database,
    MigrationRunner,
    QueryFacade,
    RecordWriter,
    VersionStore,
    discover_migrations,
)

__version__ = "1.0.0"

__all__ = [
    "Application",
    "create_application",
    "Config",
    "Database",
    "VersionStore",
    "MigrationRunner",
    "discover_migrations",
    "QueryFacade",
    "RecordWriter",
    "Migration",
    "MigrationReport",
    "MigrationStatus",
    "ConflictMode",
    "Record",
    "LiteSchemaError",
    "DatabaseError",
    "StatementError",
    "BootstrapError",
    "VersionError",
    "ShapeMismatchError",
    "MigrationError",
    "DuplicateMigrationError",
]
