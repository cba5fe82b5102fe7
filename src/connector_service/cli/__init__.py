"""
CLI - Command-line interface for the connector service.

Commands:
    connector-service serve        Run the JSON-RPC server
    connector-service connectors   List central and local connectors
    connector-service connector    Resolve one connector

Example:
    $ connector-service connector --org ballerinax --module twitter \\
          --version 4.0.0 --name Client
"""

from .main import main

__all__ = ["main"]
