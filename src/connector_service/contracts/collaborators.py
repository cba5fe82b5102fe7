"""
Collaborator Protocols - Contracts the connector service depends on.

The service only orchestrates; the real work happens behind these
interfaces:
- Registry client (remote connector search and lookup)
- Project loader (source root -> Project)
- Connector generator (Project -> connector descriptors)
- Package resolver (package descriptor -> compiled package on disk)

Using Protocol keeps fakes in tests free of inheritance.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..models import Connector, ConnectorInfo
    from ..project.model import Project
    from ..project.resolver import PackageDescriptor, ResolutionResponse


@runtime_checkable
class RegistryClientProtocol(Protocol):
    """Contract for the remote package registry ("central").

    Clients are used as async context managers and live for a single
    service call:

        async with factory(settings) as client:
            raw = await client.search_connectors("http", "any", "2201.8.0")
    """

    async def search_connectors(
        self, query: str, platform: str, tool_version: str
    ) -> dict[str, Any]:
        """Search connectors matching a package name.

        Returns:
            Raw search payload: {"connectors": [...], "count": n, ...}

        Raises:
            RegistryError: If the registry cannot answer
        """
        ...

    async def get_connector_by_id(
        self, connector_id: str, platform: str, tool_version: str
    ) -> dict[str, Any] | None:
        """Fetch a single connector by registry id.

        Returns:
            Connector JSON, or None if the registry does not know the id
        """
        ...

    async def get_connector_by_fqn(
        self, info: ConnectorInfo, platform: str, tool_version: str
    ) -> dict[str, Any] | None:
        """Fetch a single connector by its fully-qualified name."""
        ...

    async def __aenter__(self) -> RegistryClientProtocol: ...

    async def __aexit__(self, *args: Any) -> None: ...


@runtime_checkable
class ProjectLoaderProtocol(Protocol):
    """Contract for loading a project rooted at (or containing) a path."""

    def load(self, path: Path) -> Project:
        """Load the project.

        Raises:
            ProjectLoadError: If no project can be found at the path
        """
        ...


@runtime_checkable
class ConnectorGeneratorProtocol(Protocol):
    """Contract for extracting connectors from a loaded project."""

    def get_project_connectors(self, project: Project, detailed: bool) -> list[Connector]:
        """List connectors declared in the project.

        Args:
            project: Loaded project
            detailed: Include the full function schema (more expensive)
        """
        ...


@runtime_checkable
class PackageResolverProtocol(Protocol):
    """Contract for resolving package descriptors to compiled packages."""

    def resolve_packages(
        self, descriptors: list[PackageDescriptor]
    ) -> list[ResolutionResponse]:
        """Resolve each descriptor, one response per descriptor."""
        ...
