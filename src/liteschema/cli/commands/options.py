"""Config entry commands for liteschema CLI."""

import sys

from ...app import create_application
from ...core.config import Config


def handle_config(args, config: Config) -> None:
    """Handle config get/set/delete commands.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    with create_application(config) as app:
        if args.config_cmd == "get":
            value = app.get_config(args.key)
            if value is None:
                print(f"{args.key} is not set", file=sys.stderr)
                raise SystemExit(1)
            print(value)
        elif args.config_cmd == "set":
            app.set_config(args.key, args.value)
        elif args.config_cmd == "delete":
            if not app.versions.delete_config(args.key):
                print(f"{args.key} is not set", file=sys.stderr)
