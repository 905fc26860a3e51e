"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from liteschema.store.database import Database
from liteschema.store.migrations import MigrationRunner, discover_migrations
from liteschema.store.options import VersionStore
from liteschema.store.query import QueryFacade
from liteschema.store.records import RecordWriter


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for tests."""
    return tmp_path / "test.db"


@pytest.fixture
def fixtures_dir() -> Path:
    """Provide path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def contacts_dir(fixtures_dir: Path) -> Path:
    """Provide the contacts migration directory."""
    return fixtures_dir / "migrations" / "contacts"


@pytest.fixture
def db(test_db_path: Path) -> Database:
    """Provide a connected, empty database instance."""
    database = Database(test_db_path)
    database.connect()
    yield database
    database.close()


@pytest.fixture
def versions(db: Database) -> VersionStore:
    """Provide a VersionStore instance."""
    return VersionStore(db)


@pytest.fixture
def query(db: Database) -> QueryFacade:
    """Provide a QueryFacade instance."""
    return QueryFacade(db)


@pytest.fixture
def records(db: Database) -> RecordWriter:
    """Provide a RecordWriter instance."""
    return RecordWriter(db)


@pytest.fixture
def contacts_db(db: Database, contacts_dir: Path) -> Database:
    """Provide a database migrated with the contacts migrations."""
    MigrationRunner(db, discover_migrations(contacts_dir)).migrate()
    return db
