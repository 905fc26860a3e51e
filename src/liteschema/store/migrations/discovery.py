"""Find SQL migration files in a directory.

A migration file's name starts with its version number; any text after
the digits is free form:

    schema/
        0001.sql
        0002_groups.sql
        0003_seed_contacts.sql
"""

from __future__ import annotations

import re
from pathlib import Path

from loguru import logger

from ...core.types import Migration
from .runner import check_unique_versions

_VERSION_RE = re.compile(r"^(\d+)")


def parse_version(filename: str) -> int | None:
    """Get the version encoded in the leading digits of a file name.

    Returns:
        The version, or None if the name does not start with a digit.
    """
    match = _VERSION_RE.match(filename)
    if not match:
        return None
    return int(match.group(1))


def discover_migrations(directory: Path | str, pattern: str = "*.sql") -> list[Migration]:
    """Load all migration files from a directory.

    Args:
        directory: Directory holding the migration files.
        pattern: Glob pattern selecting migration files.

    Returns:
        Migrations sorted by version.

    Raises:
        FileNotFoundError: If directory does not exist.
        DuplicateMigrationError: If two files share a version.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Migration directory not found: {directory}")

    migrations: list[Migration] = []
    for path in sorted(directory.glob(pattern)):
        if not path.is_file():
            continue

        version = parse_version(path.name)
        if version is None:
            logger.debug(f"Skipping {path.name}: no leading version number")
            continue
        if version == 0:
            logger.warning(f"Skipping {path.name}: version 0 is never applied")
            continue

        migrations.append(
            Migration(
                version=version,
                source=path.read_text(encoding="utf-8"),
                origin=path.name,
            )
        )

    check_unique_versions(migrations)
    migrations.sort(key=lambda m: m.version)
    logger.debug(f"Found {len(migrations)} migration(s) in {directory}")
    return migrations
