"""Query command for liteschema CLI."""

import argparse

from ...app import create_application
from ...core.config import Config


def add_query_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments for the query command."""
    parser.add_argument("sql", help="SQL statement with ? placeholders")
    parser.add_argument("params", nargs="*", help="Values bound to the placeholders")
    parser.add_argument(
        "--header", action="store_true", help="Print column names first"
    )


def handle_query(args, config: Config) -> None:
    """Handle query command.

    Rows are printed tab separated, NULL as an empty field.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    with create_application(config) as app:
        rows = app.query_all(args.sql, list(args.params))

    if rows and args.header:
        print("\t".join(rows[0].keys()))
    for row in rows:
        print("\t".join("" if v is None else str(v) for v in row.values()))
