"""Application composition root.

Example:
    from liteschema.app import create_application
    from liteschema.core.config import Config

    with create_application(Config()) as app:
        app.migrate()
"""

from .application import Application
from .factory import create_application

__all__ = [
    "Application",
    "create_application",
]
