"""
Connector Service - Ballerina connector metadata for language server clients.

Resolves connectors from the central registry and from the user's
local projects, behind the ballerinaConnector JSON-RPC extension.
"""

__version__ = "1.0.0"

from .config import ServiceConfig, config

__all__ = [
    "__version__",
    "ServiceConfig",
    "config",
]
