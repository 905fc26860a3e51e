"""Command implementations for liteschema CLI."""

from .migrate import handle_migrate, handle_status
from .options import handle_config
from .query import add_query_arguments, handle_query

__all__ = [
    "handle_migrate",
    "handle_status",
    "handle_config",
    "handle_query",
    "add_query_arguments",
]
