"""Application composition root.

Example:
    from liteschema.app import create_application
    from liteschema.core.config import Config

    with create_application(Config.from_env()) as app:
        app.migrate()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..store.database import Database
from .application import Application

if TYPE_CHECKING:
    from ..core.config import Config
    from ..core.types import Migration


def create_application(
    config: "Config",
    migrations: "list[Migration] | None" = None,
) -> Application:
    """Create a connected Application.

    Args:
        config: Application configuration.
        migrations: Explicit migrations; discovered from
            config.migrations_dir when omitted.

    Returns:
        Application with an open database connection.
    """
    db = Database(
        config.db_path,
        timeout=config.database.timeout,
        foreign_keys=config.database.foreign_keys,
        wal=config.database.wal,
    )
    db.connect()
    logger.debug(f"Application created for {config.db_path}")
    return Application(db, config, migrations)
