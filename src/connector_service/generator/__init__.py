"""
Generator - Connector descriptors from Ballerina sources.
"""

from .connectors import ConnectorGenerator

__all__ = [
    "ConnectorGenerator",
]
