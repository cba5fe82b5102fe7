"""
CLI Parser - Argument parser for the connector-service command.

Defines all subcommands and their arguments.
"""

import argparse

__all__ = ["create_parser"]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="connector-service",
        description="Ballerina connector metadata for language server clients",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Echo diagnostic messages meant for the client to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the JSON-RPC server")
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Port number")

    # connectors
    list_parser = subparsers.add_parser("connectors", help="List central and local connectors")
    list_parser.add_argument("--package", default="", help="Registry search filter")
    list_parser.add_argument("--file", default="", help="File of the local project")

    # connector
    get_parser = subparsers.add_parser("connector", help="Get one connector")
    get_parser.add_argument("--id", dest="connector_id", default=None, help="Registry connector id")
    get_parser.add_argument(
        "--full",
        action="store_true",
        help="Look the connector up in the registry by fully-qualified name",
    )
    get_parser.add_argument("--org", default="", help="Organization")
    get_parser.add_argument("--package", default="", help="Package name")
    get_parser.add_argument("--module", default="", help="Module name")
    get_parser.add_argument("--version", default="", help="Package version")
    get_parser.add_argument("--name", required=True, help="Connector (client class) name")
    get_parser.add_argument("--file", default=None, help="File of the local project")

    return parser
