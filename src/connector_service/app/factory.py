"""
Application Factory - Creates and configures the FastAPI app.

Uses the factory pattern for testability and flexibility.
Each call creates a fresh app instance with all components wired up.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from .. import __version__
from ..config import ServiceConfig
from ..service import ConnectorContext, ConnectorService
from .jsonrpc import JsonRpcDispatcher
from .middleware import ErrorMiddleware, LoggingMiddleware
from .routes import router as core_router

logger = structlog.get_logger(__name__)


def create_app(
    config: ServiceConfig | None = None,
    context: ConnectorContext | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Service configuration (uses defaults if None)
        context: Service collaborators (real ones built from config if None)

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = ServiceConfig()
    if context is None:
        context = ConnectorContext.default(config)

    service = ConnectorService(context)
    dispatcher = JsonRpcDispatcher(service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifecycle."""
        logger.info(
            "service_started",
            version=__version__,
            host=config.host,
            port=config.port,
            methods=dispatcher.methods,
        )
        yield
        logger.info("service_stopped")

    app = FastAPI(
        title="Connector Service",
        description="Ballerina connector metadata for language server clients",
        version=__version__,
        lifespan=lifespan,
    )

    # Add middleware (order matters - last added runs first)
    app.add_middleware(ErrorMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.include_router(core_router)

    # Store config and components on app state
    app.state.config = config
    app.state.service = service
    app.state.dispatcher = dispatcher

    return app
