"""
App - FastAPI application and HTTP layer.

Provides:
- Application factory for creating configured FastAPI instances
- Core routes (health, JSON-RPC endpoint)
- Middleware (logging, error handling)

Example:
    from connector_service.app import create_app
    from connector_service.config import ServiceConfig

    config = ServiceConfig()
    app = create_app(config)

    # Run with uvicorn
    import uvicorn
    uvicorn.run(app, host=config.host, port=config.port)
"""

from .factory import create_app
from .jsonrpc import JsonRpcDispatcher
from .middleware import ErrorMiddleware, LoggingMiddleware
from .routes import router as core_router

__all__ = [
    "create_app",
    "core_router",
    "ErrorMiddleware",
    "JsonRpcDispatcher",
    "LoggingMiddleware",
]
