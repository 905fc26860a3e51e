"""CLI entry point for liteschema."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from loguru import logger

from ..core.config import Config
from ..core.exceptions import LiteSchemaError
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="liteschema",
        description="Versioned SQLite schema migrations and queries",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 1.0.0")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug logging"
    )
    parser.add_argument("--config", type=Path, help="TOML configuration file")
    parser.add_argument("--db", type=Path, help="Database file (overrides config)")
    parser.add_argument(
        "-m",
        "--migrations",
        type=Path,
        help="Directory with NNNN*.sql migration files (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    subparsers.add_parser("migrate", help="Apply pending migrations")
    subparsers.add_parser("status", help="Show schema version and pending migrations")

    # Config commands
    config_parser = subparsers.add_parser("config", help="Read or write opt entries")
    config_subparsers = config_parser.add_subparsers(dest="config_cmd", required=True)

    get_parser = config_subparsers.add_parser("get", help="Print a value")
    get_parser.add_argument("key", help="Entry name")

    set_parser = config_subparsers.add_parser("set", help="Store a value")
    set_parser.add_argument("key", help="Entry name")
    set_parser.add_argument("value", help="Value to store")

    delete_parser = config_subparsers.add_parser("delete", help="Remove an entry")
    delete_parser.add_argument("key", help="Entry name")

    # Query command
    query_parser = subparsers.add_parser("query", help="Run a SQL query")
    commands.add_query_arguments(query_parser)

    return parser


def configure_logging(verbose: bool) -> None:
    """Send log output to stderr, debug level with --verbose."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def load_config(args) -> Config:
    """Build the configuration from file/env and command line overrides."""
    config = Config.from_env_or_file(args.config)
    if args.db:
        config.db_path = args.db
    if args.migrations:
        config.migrations_dir = args.migrations
    return config


def main() -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)

    try:
        config = load_config(args)
        if args.command == "migrate":
            commands.handle_migrate(args, config)
        elif args.command == "status":
            commands.handle_status(args, config)
        elif args.command == "config":
            commands.handle_config(args, config)
        elif args.command == "query":
            commands.handle_query(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except (LiteSchemaError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
