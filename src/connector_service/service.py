"""
Connector Service - Handlers of the ballerinaConnector extension.

Two operations:
- list_connectors: registry search results plus connectors of the open project
- get_connector:   one connector, found through an ordered chain of lookups

Collaborators come from an injected ConnectorContext. Settings and
registry clients are created fresh for every call, so each response
reflects the current state of Settings.toml, the registry and the disk.

Internally every lookup returns an Outcome (found / empty / failed).
The public handlers turn outcomes into the wire contract: failures are
logged through the ClientLogger and become empty lists or None.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Generic, TypeVar

import structlog

from .central import client_from_settings
from .config import SUPPORTED_PLATFORM, ServiceConfig, remote_repo_url
from .contracts import (
    ConnectorGeneratorProtocol,
    PackageResolverProtocol,
    ProjectLoaderProtocol,
    RegistryClientProtocol,
    RegistryError,
)
from .generator import ConnectorGenerator
from .logging import ClientLogger
from .models import (
    CentralConnectorListResult,
    Connector,
    ConnectorInfo,
    ConnectorListRequest,
    ConnectorListResponse,
    ConnectorRequest,
    PackageCoordinate,
)
from .project import BalaCacheResolver, ProjectLoader, resolve_bala_path
from .settings import Settings, read_settings

__all__ = [
    "CONNECTOR_METHOD",
    "CONNECTORS_METHOD",
    "ConnectorContext",
    "ConnectorService",
    "Outcome",
    "OutcomeStatus",
]

logger = structlog.get_logger(__name__)

CONNECTORS_METHOD = "ballerinaConnector/connectors"
CONNECTOR_METHOD = "ballerinaConnector/connector"

T = TypeVar("T")


class OutcomeStatus(Enum):
    FOUND = "found"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one lookup step."""

    status: OutcomeStatus
    value: T | None = None
    error: BaseException | None = None

    @classmethod
    def found(cls, value: T) -> Outcome[T]:
        return cls(OutcomeStatus.FOUND, value=value)

    @classmethod
    def empty(cls) -> Outcome[T]:
        return cls(OutcomeStatus.EMPTY)

    @classmethod
    def failed(cls, error: BaseException) -> Outcome[T]:
        return cls(OutcomeStatus.FAILED, error=error)

    @property
    def is_found(self) -> bool:
        return self.status is OutcomeStatus.FOUND

    @property
    def is_failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED


@dataclass
class ConnectorContext:
    """Collaborators of the connector service.

    Use ConnectorContext.default() for the real wiring; tests pass fakes.
    """

    config: ServiceConfig
    settings_loader: Callable[[], Settings]
    client_factory: Callable[[Settings], RegistryClientProtocol]
    project_loader: ProjectLoaderProtocol
    generator: ConnectorGeneratorProtocol
    resolver: PackageResolverProtocol
    client_logger: ClientLogger = field(default_factory=ClientLogger)

    @classmethod
    def default(
        cls, config: ServiceConfig, client_logger: ClientLogger | None = None
    ) -> ConnectorContext:
        return cls(
            config=config,
            settings_loader=lambda: read_settings(config.settings_file),
            client_factory=lambda settings: client_from_settings(
                settings, remote_repo_url(), timeout=config.registry_timeout
            ),
            project_loader=ProjectLoader(),
            generator=ConnectorGenerator(),
            resolver=BalaCacheResolver(config.bala_cache_dir),
            client_logger=client_logger or ClientLogger(debug=config.client_debug),
        )


Strategy = Callable[[ConnectorRequest], Awaitable[Outcome[dict[str, Any]]]]


class ConnectorService:
    """Implements ballerinaConnector/connectors and ballerinaConnector/connector."""

    def __init__(self, context: ConnectorContext) -> None:
        self.context = context

    @property
    def tool_version(self) -> str:
        return self.context.config.ballerina_version

    # ------------------------------------------------------------------
    # ballerinaConnector/connectors
    # ------------------------------------------------------------------

    async def list_connectors(self, request: ConnectorListRequest) -> ConnectorListResponse:
        """Registry and local connectors.

        Each source degrades to an empty list on its own; a registry
        failure does not hide the local connectors, nor the reverse.
        """
        central = await self.fetch_central_connectors(request.package_name)
        local = self.fetch_local_connectors(request.target_file)

        for source, outcome in (("central", central), ("local", local)):
            if outcome.is_failed:
                self.context.client_logger.log_error(
                    f"Operation '{CONNECTORS_METHOD}' failed!",
                    outcome.error,
                    source=source,
                )

        return ConnectorListResponse(central=central.value or [], local=local.value or [])

    async def fetch_central_connectors(self, query: str) -> Outcome[list[dict[str, Any]]]:
        """Search the registry for connectors matching a package name."""
        try:
            async with self._registry_client() as client:
                raw = await client.search_connectors(query, SUPPORTED_PLATFORM, self.tool_version)
            if isinstance(raw, str):
                raw = json.loads(raw)
            result = CentralConnectorListResult.model_validate(raw)
        except Exception as e:
            return Outcome.failed(e)

        return Outcome.found(result.connectors) if result.connectors else Outcome.empty()

    def fetch_local_connectors(
        self, target_file: str | None, detailed: bool = False
    ) -> Outcome[list[Connector]]:
        """Connectors declared in the project that owns target_file."""
        if not target_file:
            return Outcome.empty()

        try:
            project = self.context.project_loader.load(Path(target_file))
            connectors = self.context.generator.get_project_connectors(project, detailed)
        except Exception as e:
            return Outcome.failed(e)

        return Outcome.found(list(connectors)) if connectors else Outcome.empty()

    # ------------------------------------------------------------------
    # ballerinaConnector/connector
    # ------------------------------------------------------------------

    async def get_connector(self, request: ConnectorRequest) -> dict[str, Any] | None:
        """First connector found by the lookup chain, or None."""
        outcome = await self.resolve_connector(request)
        return outcome.value if outcome.is_found else None

    async def resolve_connector(self, request: ConnectorRequest) -> Outcome[dict[str, Any]]:
        """Run the lookup chain; stops at the first strategy that finds one.

        Order:
        1. Registry, by connector id
        2. Registry, by fully-qualified name
        3. Project owning the target file
        4. Compiled package of (org, module, version), detailed schema

        Failed strategies are logged and the chain moves on. When nothing
        is found the last failure (if any) is returned.
        """
        last_failure: Outcome[dict[str, Any]] | None = None

        for strategy, message in self._strategies(request):
            outcome = await strategy(request)
            if outcome.is_found:
                return outcome
            if outcome.is_failed:
                self.context.client_logger.log_error(message, outcome.error, strategy=strategy.__name__)
                last_failure = outcome

        return last_failure or Outcome.empty()

    def _strategies(self, request: ConnectorRequest) -> list[tuple[Strategy, str]]:
        failed = f"Operation '{CONNECTOR_METHOD}' failed!"
        key = PackageCoordinate(
            org=request.org_name, name=request.module_name, version=request.version
        ).cache_key
        failed_for = f"Operation '{CONNECTOR_METHOD}' for {key}:{request.name} failed!"

        return [
            (self._by_connector_id, failed),
            (self._by_full_name, failed),
            (self._by_target_file, failed_for),
            (self._by_compiled_package, failed_for),
        ]

    async def _by_connector_id(self, request: ConnectorRequest) -> Outcome[dict[str, Any]]:
        if request.connector_id is None:
            return Outcome.empty()

        try:
            async with self._registry_client() as client:
                raw = await client.get_connector_by_id(
                    request.connector_id, SUPPORTED_PLATFORM, self.tool_version
                )
            return _registry_outcome(raw)
        except Exception as e:
            return Outcome.failed(e)

    async def _by_full_name(self, request: ConnectorRequest) -> Outcome[dict[str, Any]]:
        if not request.is_full_connector:
            return Outcome.empty()

        try:
            info = ConnectorInfo(
                org_name=request.org_name,
                package_name=request.package_name,
                module_name=request.module_name,
                version=request.version,
                name=request.name,
            )
            async with self._registry_client() as client:
                raw = await client.get_connector_by_fqn(info, SUPPORTED_PLATFORM, self.tool_version)
            return _registry_outcome(raw)
        except Exception as e:
            return Outcome.failed(e)

    async def _by_target_file(self, request: ConnectorRequest) -> Outcome[dict[str, Any]]:
        if request.target_file is None:
            return Outcome.empty()

        local = self.fetch_local_connectors(request.target_file, detailed=False)
        return _match_name(local, request.name)

    async def _by_compiled_package(self, request: ConnectorRequest) -> Outcome[dict[str, Any]]:
        try:
            bala_path = resolve_bala_path(
                self.context.resolver, request.org_name, request.module_name, request.version
            )
        except Exception as e:
            return Outcome.failed(e)

        local = self.fetch_local_connectors(str(bala_path), detailed=True)
        return _match_name(local, request.name)

    def _registry_client(self) -> RegistryClientProtocol:
        settings = self.context.settings_loader()
        return self.context.client_factory(settings)


def _registry_outcome(raw: dict[str, Any] | None) -> Outcome[dict[str, Any]]:
    """Registry payloads are opaque; they only need to be named objects."""
    if not raw:
        return Outcome.empty()
    if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
        raise RegistryError("Registry returned a connector without a name")
    return Outcome.found(raw)


def _match_name(outcome: Outcome[list[Connector]], name: str) -> Outcome[dict[str, Any]]:
    """Exact, case-sensitive name match."""
    if not outcome.is_found:
        return Outcome(outcome.status, error=outcome.error)

    for connector in outcome.value or []:
        if connector.name == name:
            return Outcome.found(connector.to_wire())
    return Outcome.empty()
