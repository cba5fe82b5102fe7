"""
Core Routes - Health and the JSON-RPC endpoint.
"""

import json
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from .jsonrpc import JsonRpcDispatcher, parse_error

router = APIRouter(tags=["core"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Basic health check.

    Always returns 200 if the server is running.
    """
    from .. import __version__

    return {"status": "ok", "version": __version__}


@router.get("/methods")
async def methods(request: Request) -> list[str]:
    """JSON-RPC methods served at /jsonrpc."""
    dispatcher: JsonRpcDispatcher = request.app.state.dispatcher
    return dispatcher.methods


@router.post("/jsonrpc", response_model=None)
async def jsonrpc(request: Request) -> Any:
    """JSON-RPC 2.0 entry point of the ballerinaConnector extension."""
    try:
        payload = json.loads(await request.body())
    except ValueError:
        return JSONResponse(parse_error())

    dispatcher: JsonRpcDispatcher = request.app.state.dispatcher
    response = await dispatcher.dispatch(payload)
    if response is None:
        return Response(status_code=204)
    return JSONResponse(response)
