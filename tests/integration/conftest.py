"""Pytest configuration and fixtures for integration tests."""

from pathlib import Path

import pytest

from liteschema.app import Application, create_application
from liteschema.core.config import Config


@pytest.fixture
def integration_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for integration tests."""
    return tmp_path / "integration_test.db"


@pytest.fixture
def config(integration_db_path: Path) -> Config:
    """Provide a Config instance pointing to the test database."""
    cfg = Config()
    cfg.db_path = integration_db_path
    return cfg


@pytest.fixture
def migrations_dir(tmp_path: Path) -> Path:
    """Provide a directory with three migrations for a small contacts schema."""
    directory = tmp_path / "migrations"
    directory.mkdir()
    (directory / "0001_contacts.sql").write_text(
        "CREATE TABLE contacts (id INTEGER PRIMARY KEY, name TEXT NOT NULL);\n"
    )
    (directory / "0002_groups.sql").write_text(
        "CREATE TABLE groups (id INTEGER PRIMARY KEY, name TEXT NOT NULL);\n"
    )
    (directory / "0003_seed.sql").write_text(
        "INSERT INTO contacts (id, name) VALUES (1, 'Ada');\n"
        "INSERT INTO contacts (id, name) VALUES (2, 'Grace');\n"
    )
    return directory


@pytest.fixture
def app(config: Config, migrations_dir: Path) -> Application:
    """Provide an application over an empty database and the test migrations."""
    config.migrations_dir = migrations_dir
    application = create_application(config)
    yield application
    application.close()
