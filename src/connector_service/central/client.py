"""
Central Client - HTTP client for the Ballerina package registry.

Features:
- One httpx.AsyncClient per instance (instances live for one service call)
- Proxy and bearer-token support from Settings.toml
- Registry failures mapped to RegistryError, 404 mapped to None
"""

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from ..contracts import RegistryError
from ..models import ConnectorInfo
from ..settings import Settings, access_token

__all__ = ["CentralClient", "client_from_settings"]

logger = structlog.get_logger(__name__)

PLATFORM_HEADER = "Ballerina-Platform"


class CentralClient:
    """Async client for connector endpoints of the central registry.

    Implements RegistryClientProtocol.

    Example:
        async with CentralClient("https://api.central.ballerina.io/2.0/registry") as client:
            raw = await client.search_connectors("http", "any", "2201.8.0")
    """

    def __init__(
        self,
        base_url: str,
        proxy: str | None = None,
        access_token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers=headers,
            proxy=proxy,
            transport=transport,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "CentralClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def search_connectors(
        self, query: str, platform: str, tool_version: str
    ) -> dict[str, Any]:
        """Search connectors; an empty query lists all of them."""
        params = {"q": query} if query else None
        payload = await self._get_json("/connectors", platform, tool_version, params=params)
        if payload is None:
            return {"connectors": [], "count": 0}
        if not isinstance(payload, dict):
            raise RegistryError("Unexpected search payload")
        return payload

    async def get_connector_by_id(
        self, connector_id: str, platform: str, tool_version: str
    ) -> dict[str, Any] | None:
        """Fetch one connector by its registry id."""
        path = f"/connectors/{quote(connector_id, safe='')}"
        return await self._get_object(path, platform, tool_version)

    async def get_connector_by_fqn(
        self, info: ConnectorInfo, platform: str, tool_version: str
    ) -> dict[str, Any] | None:
        """Fetch one connector by org/package/version/module/name."""
        segments = [info.org_name, info.package_name, info.version, info.module_name, info.name]
        path = "/connectors/" + "/".join(quote(s, safe="") for s in segments)
        return await self._get_object(path, platform, tool_version)

    async def _get_object(
        self, path: str, platform: str, tool_version: str
    ) -> dict[str, Any] | None:
        payload = await self._get_json(path, platform, tool_version)
        if payload is None:
            return None
        if not isinstance(payload, dict):
            raise RegistryError(f"Unexpected connector payload from {path}")
        return payload

    async def _get_json(
        self,
        path: str,
        platform: str,
        tool_version: str,
        params: dict[str, str] | None = None,
    ) -> Any:
        """GET a JSON document; None on 404."""
        headers = {
            PLATFORM_HEADER: platform,
            "User-Agent": f"ballerina/{tool_version}",
        }

        try:
            response = await self._client.get(path, params=params, headers=headers)
        except httpx.TimeoutException as e:
            raise RegistryError(f"Timeout: {e}") from e
        except httpx.HTTPError as e:
            raise RegistryError(f"Connection error: {e}") from e

        if response.status_code == 404:
            logger.debug("central_not_found", path=path)
            return None

        if response.status_code >= 400:
            raise RegistryError(
                f"Unexpected status {response.status_code} for {path}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise RegistryError(f"Invalid JSON from {path}") from e


def client_from_settings(
    settings: Settings, base_url: str, timeout: float = 30.0
) -> CentralClient:
    """Build a client bound to the configured proxy and access token."""
    return CentralClient(
        base_url,
        proxy=settings.proxy.url,
        access_token=access_token(settings),
        timeout=timeout,
    )
