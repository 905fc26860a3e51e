"""Core types, configuration and exceptions for liteschema."""

from .config import Config, DatabaseConfig, MigrationConfig
from .exceptions import (
    BootstrapError,
    DatabaseError,
    DuplicateMigrationError,
    LiteSchemaError,
    MigrationError,
    ShapeMismatchError,
    StatementError,
    VersionError,
)
from .types import ConflictMode, Migration, MigrationReport, MigrationStatus, Record

__all__ = [
    "Config",
    "DatabaseConfig",
    "MigrationConfig",
    "LiteSchemaError",
    "DatabaseError",
    "StatementError",
    "BootstrapError",
    "VersionError",
    "ShapeMismatchError",
    "MigrationError",
    "DuplicateMigrationError",
    "ConflictMode",
    "Migration",
    "MigrationReport",
    "MigrationStatus",
    "Record",
]
