"""Pytest fixtures for app module tests."""

from pathlib import Path

import pytest

from liteschema.core.config import Config


@pytest.fixture
def config(tmp_path: Path, contacts_dir: Path) -> Config:
    """Provide a Config pointing at a temporary database and the contacts migrations."""
    cfg = Config()
    cfg.db_path = tmp_path / "test.db"
    cfg.migrations_dir = contacts_dir
    return cfg
