"""
Wire models for the ballerinaConnector extension.

Field names on the wire are camelCase (packageName, targetFile, ...) to
stay compatible with existing editor clients; Python code uses the
snake_case attribute names.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .config import DEFAULT_VERSION

__all__ = [
    "CentralConnectorListResult",
    "Connector",
    "ConnectorFunction",
    "ConnectorInfo",
    "ConnectorListRequest",
    "ConnectorListResponse",
    "ConnectorRequest",
    "PackageCoordinate",
    "PackageInfo",
    "Parameter",
]


class WireModel(BaseModel):
    """Base model: camelCase aliases, construction by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump using wire field names."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Connector descriptors
# ---------------------------------------------------------------------------


class PackageInfo(WireModel):
    """Package a connector belongs to."""

    model_config = ConfigDict(extra="allow")

    organization: str = ""
    name: str = ""
    version: str = ""
    platform: str | None = None


class Parameter(WireModel):
    """A single function parameter."""

    name: str
    type_name: str = Field(..., description="Declared Ballerina type")
    optional: bool = False
    default_value: str | None = None
    documentation: str | None = None


class ConnectorFunction(WireModel):
    """A client method: init, remote or resource function."""

    name: str
    qualifiers: list[str] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    return_type: str | None = None
    documentation: str | None = None
    accessor: str | None = Field(None, description="HTTP-style accessor of a resource function")
    path: str | None = Field(None, description="Resource path of a resource function")


class Connector(WireModel):
    """Descriptor of a network client object.

    Built from local sources. Registry connectors are never parsed into
    this model; they travel as the raw JSON the registry returned.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str
    display_name: str | None = None
    documentation: str | None = None
    module_name: str | None = None
    package: PackageInfo | None = None
    functions: list[ConnectorFunction] = Field(default_factory=list)
    display_annotation: dict[str, Any] = Field(default_factory=dict)
    icon: str = ""


class CentralConnectorListResult(WireModel):
    """Parsed registry search payload.

    Connectors are kept as the registry sent them; only the envelope is
    checked.
    """

    model_config = ConfigDict(extra="ignore")

    connectors: list[dict[str, Any]] = Field(default_factory=list)
    count: int = 0
    offset: int = 0
    limit: int = 0


# ---------------------------------------------------------------------------
# Requests and responses
# ---------------------------------------------------------------------------


class ConnectorListRequest(WireModel):
    """Params of ballerinaConnector/connectors."""

    package_name: str = Field("", description="Registry search filter; empty means all")
    target_file: str = Field("", description="File of the open project, may be unsaved")

    @field_validator("package_name", "target_file", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ConnectorListResponse(WireModel):
    """Result of ballerinaConnector/connectors.

    Registry connectors are passed through untouched; local ones are
    dumped with wire names.
    """

    central: list[dict[str, Any]] = Field(default_factory=list)
    local: list[Connector] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {
            "central": list(self.central),
            "local": [connector.to_wire() for connector in self.local],
        }


class ConnectorRequest(WireModel):
    """Params of ballerinaConnector/connector."""

    connector_id: str | None = None
    is_full_connector: bool = False
    org_name: str = ""
    package_name: str = ""
    module_name: str = ""
    version: str = ""
    name: str = ""
    target_file: str | None = None

    @field_validator("org_name", "package_name", "module_name", "version", "name", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("is_full_connector", mode="before")
    @classmethod
    def null_is_false(cls, value: Any) -> Any:
        return False if value is None else value


class ConnectorInfo(WireModel):
    """Fully-qualified connector name used for registry lookups."""

    org_name: str
    package_name: str
    module_name: str
    version: str
    name: str


class PackageCoordinate(WireModel):
    """(org, name, version) triple identifying a registry package."""

    org: str
    name: str
    version: str = ""

    @property
    def cache_key(self) -> str:
        """Diagnostic key, e.g. wso2_http_0.0.0 for an empty version."""
        return f"{self.org}_{self.name}_{self.version or DEFAULT_VERSION}"
