"""
JSON-RPC 2.0 dispatch for the ballerinaConnector extension.

Methods:
    ballerinaConnector/connectors   {packageName, targetFile} -> {central, local}
    ballerinaConnector/connector    {connectorId?, isFullConnector?, ...} -> connector | null

Requests without an "id" are notifications: they run, but nothing is
returned. Batch requests are not supported.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from ..models import ConnectorListRequest, ConnectorRequest
from ..service import CONNECTOR_METHOD, CONNECTORS_METHOD, ConnectorService

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "JsonRpcDispatcher",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "parse_error",
]

logger = structlog.get_logger(__name__)

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


@dataclass(frozen=True)
class Method:
    """A registered JSON-RPC method."""

    params: type[BaseModel]
    handler: Callable[[Any], Awaitable[Any]]


class JsonRpcDispatcher:
    """Routes JSON-RPC payloads to ConnectorService handlers."""

    def __init__(self, service: ConnectorService) -> None:
        self.service = service
        self._methods: dict[str, Method] = {
            CONNECTORS_METHOD: Method(ConnectorListRequest, self._connectors),
            CONNECTOR_METHOD: Method(ConnectorRequest, self._connector),
        }

    @property
    def methods(self) -> list[str]:
        return sorted(self._methods)

    async def dispatch(self, payload: Any) -> dict[str, Any] | None:
        """Handle one decoded JSON-RPC payload.

        Returns:
            Response object, or None for notifications
        """
        if not isinstance(payload, dict) or payload.get("jsonrpc") != "2.0":
            return _error(None, INVALID_REQUEST, "Invalid Request")

        request_id = payload.get("id")
        is_notification = "id" not in payload
        method_name = payload.get("method")

        if not isinstance(method_name, str):
            return _error(request_id, INVALID_REQUEST, "Invalid Request")

        method = self._methods.get(method_name)
        if method is None:
            logger.warning("jsonrpc_method_not_found", method=method_name)
            return None if is_notification else _error(request_id, METHOD_NOT_FOUND, "Method not found")

        try:
            params = method.params.model_validate(payload.get("params") or {})
        except ValidationError as e:
            logger.warning("jsonrpc_invalid_params", method=method_name, errors=e.error_count())
            return None if is_notification else _error(
                request_id, INVALID_PARAMS, "Invalid params", e.errors(include_url=False, include_context=False)
            )

        try:
            result = await method.handler(params)
        except Exception as e:
            logger.exception("jsonrpc_handler_failed", method=method_name, error=str(e))
            return None if is_notification else _error(request_id, INTERNAL_ERROR, "Internal error")

        if is_notification:
            return None
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    async def _connectors(self, params: ConnectorListRequest) -> dict[str, Any]:
        response = await self.service.list_connectors(params)
        return response.to_wire()

    async def _connector(self, params: ConnectorRequest) -> dict[str, Any] | None:
        return await self.service.get_connector(params)


def parse_error() -> dict[str, Any]:
    return _error(None, PARSE_ERROR, "Parse error")


def _error(request_id: Any, code: int, message: str, data: Any = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": request_id, "error": error}
