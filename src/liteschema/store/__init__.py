"""Data access layer for liteschema.

This package provides:
- Database: SQLite connection, statement execution and transactions
- VersionStore: schema version and configuration entries (opt table)
- MigrationRunner: ordered, transactional schema migrations
- QueryFacade: result shaping helpers
- RecordWriter: insert-or-replace / insert-or-ignore with read-back

Example:
    from liteschema.store import Database, QueryFacade

    with Database("app.db") as db:
        rows = QueryFacade(db).query_all("SELECT * FROM contacts")
"""

from .database import Database, iter_statements
from .migrations import MigrationRunner, discover_migrations
from .options import OPT_TABLE, VERSION_KEY, VersionStore
from .params import normalize_params
from .query import QueryFacade
from .records import RecordWriter, quote_identifier

__all__ = [
    "Database",
    "iter_statements",
    "normalize_params",
    "VersionStore",
    "OPT_TABLE",
    "VERSION_KEY",
    "MigrationRunner",
    "discover_migrations",
    "QueryFacade",
    "RecordWriter",
    "quote_identifier",
]
