"""
CLI Commands - Built-in command implementations.

Each command receives parsed args and config, returns an exit code.
"""

import argparse
import asyncio
import json
import sys
from typing import Any

import uvicorn

from ..app import create_app
from ..config import ServiceConfig
from ..logging import ClientLogger, MessageType, configure_logging
from ..models import ConnectorListRequest, ConnectorRequest
from ..service import ConnectorContext, ConnectorService

__all__ = ["BUILTIN_COMMANDS", "run_command"]

BUILTIN_COMMANDS = {"serve", "connectors", "connector"}


def run_command(command: str, args: argparse.Namespace, config: ServiceConfig) -> int:
    """Dispatch to command handler."""
    handlers = {
        "serve": cmd_serve,
        "connectors": cmd_connectors,
        "connector": cmd_connector,
    }

    handler = handlers.get(command)
    if not handler:
        print_error(f"Unknown command: {command}")
        return 1

    return handler(args, config)


def cmd_serve(args: argparse.Namespace, config: ServiceConfig) -> int:
    """Run the JSON-RPC server in the foreground."""
    configure_logging(config.log_level, config.log_json)

    host = args.host or config.host
    port = args.port or config.port
    app = create_app(config, _context(args, config))

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=config.log_level.lower(),
        access_log=False,  # We have our own logging middleware
    )
    return 0


def cmd_connectors(args: argparse.Namespace, config: ServiceConfig) -> int:
    """Print central and local connectors."""
    configure_logging(config.log_level, config.log_json)

    service = ConnectorService(_context(args, config))
    request = ConnectorListRequest(package_name=args.package, target_file=args.file)
    response = asyncio.run(service.list_connectors(request))

    print_json(response.to_wire())
    return 0


def cmd_connector(args: argparse.Namespace, config: ServiceConfig) -> int:
    """Print one connector; exit code 1 if none was found."""
    configure_logging(config.log_level, config.log_json)

    service = ConnectorService(_context(args, config))
    request = ConnectorRequest(
        connector_id=args.connector_id,
        is_full_connector=args.full,
        org_name=args.org,
        package_name=args.package,
        module_name=args.module,
        version=args.version,
        name=args.name,
        target_file=args.file,
    )
    connector = asyncio.run(service.get_connector(request))

    print_json(connector)
    return 0 if connector is not None else 1


def _context(args: argparse.Namespace, config: ServiceConfig) -> ConnectorContext:
    debug = getattr(args, "debug", False) or config.client_debug
    client_logger = ClientLogger(debug=debug, sink=print_client_message if debug else None)
    return ConnectorContext.default(config, client_logger)


def print_client_message(params: dict[str, Any]) -> None:
    """Stand-in for window/logMessage when running from a terminal."""
    level = MessageType(params["type"]).name.lower()
    print(f"[{level}] {params['message']}", file=sys.stderr)


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def print_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"Error: {message}", file=sys.stderr)
