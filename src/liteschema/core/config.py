"""Configuration management for liteschema."""

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from loguru import logger


@dataclass
class DatabaseConfig:
    """Connection settings applied when the database is opened."""

    # Seconds to wait for a lock before failing with "database is locked"
    timeout: float = 10.0
    foreign_keys: bool = True
    # Best effort; engines without WAL support keep their journal mode
    wal: bool = True


@dataclass
class MigrationConfig:
    """Migration discovery and post-migration settings."""

    pattern: str = "*.sql"
    vacuum: bool = True


def _default_db_path() -> Path:
    """Get default database path."""
    data_dir = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return data_dir / "liteschema" / "app.db"


def _truthy(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _apply_section(target: Any, values: dict[str, Any]) -> None:
    """Copy known keys from a TOML table onto a dataclass instance."""
    known = {f.name for f in fields(target)}
    for key, value in values.items():
        if key in known:
            setattr(target, key, value)
        else:
            logger.warning(f"Ignoring unknown config key: {key!r}")


@dataclass
class Config:
    """Main application configuration."""

    db_path: Path = field(default_factory=_default_db_path)
    migrations_dir: Path | None = None
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    migration: MigrationConfig = field(default_factory=MigrationConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path | str) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Args:
            path: Path to the TOML file.

        Returns:
            Config with file values and environment overrides applied.
        """
        path = Path(path)
        with path.open("rb") as f:
            data = tomllib.load(f)

        config = cls()
        if "db_path" in data:
            config.db_path = Path(data["db_path"]).expanduser()
        if "migrations_dir" in data:
            config.migrations_dir = Path(data["migrations_dir"]).expanduser()
        if isinstance(data.get("database"), dict):
            _apply_section(config.database, data["database"])
        if isinstance(data.get("migration"), dict):
            _apply_section(config.migration, data["migration"])

        logger.debug(f"Loaded configuration from {path}")
        config._apply_env()
        return config

    @classmethod
    def from_env_or_file(cls, path: Path | str | None = None) -> "Config":
        """Load from an explicit path, LITESCHEMA_CONFIG, or the environment."""
        path = path or os.environ.get("LITESCHEMA_CONFIG")
        if path:
            return cls.from_file(path)
        return cls.from_env()

    def _apply_env(self) -> None:
        if path := os.environ.get("LITESCHEMA_DB"):
            self.db_path = Path(path)

        if path := os.environ.get("LITESCHEMA_MIGRATIONS"):
            self.migrations_dir = Path(path)

        if timeout := os.environ.get("LITESCHEMA_TIMEOUT"):
            self.database.timeout = float(timeout)

        if value := os.environ.get("LITESCHEMA_NO_WAL"):
            self.database.wal = not _truthy(value)

        if value := os.environ.get("LITESCHEMA_NO_VACUUM"):
            self.migration.vacuum = not _truthy(value)
