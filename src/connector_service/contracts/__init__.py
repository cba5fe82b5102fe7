"""
Contracts (Protocols and errors) for the connector service.

These protocols define the interfaces that collaborators must satisfy.
Using Protocol enables structural subtyping - no inheritance required.
"""

from .collaborators import (
    ConnectorGeneratorProtocol,
    PackageResolverProtocol,
    ProjectLoaderProtocol,
    RegistryClientProtocol,
)
from .errors import (
    ConnectorServiceError,
    PackageResolutionError,
    ProjectLoadError,
    RegistryError,
    SettingsError,
)

__all__ = [
    "ConnectorGeneratorProtocol",
    "ConnectorServiceError",
    "PackageResolutionError",
    "PackageResolverProtocol",
    "ProjectLoadError",
    "ProjectLoaderProtocol",
    "RegistryClientProtocol",
    "RegistryError",
    "SettingsError",
]
