"""
CLI Main - Entry point for the `connector-service` command.

Usage:
    connector-service serve [--host H] [--port P]
    connector-service connectors [--package NAME] [--file PATH]
    connector-service connector --name N [--id ID] [--full] [--org O]
                                [--package P] [--module M] [--version V] [--file PATH]
"""

import sys

from ..config import ServiceConfig
from .commands import print_error, run_command
from .parser import create_parser

__all__ = ["main"]


def main(args: list[str] | None = None) -> int:
    """Main entry point for the connector-service CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    if args is None:
        args = sys.argv[1:]

    parser = create_parser()
    parsed = parser.parse_args(args)

    config = ServiceConfig()

    if parsed.command is None:
        parser.print_help()
        return 0

    try:
        return run_command(parsed.command, parsed, config)
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        print_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
