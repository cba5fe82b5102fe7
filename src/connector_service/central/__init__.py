"""
Central - Client for the remote Ballerina package registry.
"""

from .client import CentralClient, client_from_settings

__all__ = [
    "CentralClient",
    "client_from_settings",
]
