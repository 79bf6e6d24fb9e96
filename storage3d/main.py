"""
FastAPI application serving the 3D storage MCP tools.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .core.config import Settings, get_settings
from .core.logging import setup_logging
from .mcp.dispatcher import ProtocolDispatcher
from .mcp.registry import ToolRegistry
from .mcp.routes import build_discovery_document, create_mcp_router
from .mcp.tools import register_storage_tools
from .storage.base import BlobStore
from .storage.factory import build_blob_store

logger = structlog.get_logger(__name__)


def build_dispatcher(settings: Settings, store: BlobStore) -> ProtocolDispatcher:
    """Registry for ``store``, frozen, wrapped in a dispatcher."""
    registry = register_storage_tools(ToolRegistry(), store).freeze()
    return ProtocolDispatcher(
        registry,
        server_name=settings.service_name,
        server_version=settings.service_version,
    )


def create_app(settings: Optional[Settings] = None, store: Optional[BlobStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The blob store is built here, so missing storage configuration fails
    at startup with StorageConfigurationError instead of on the first call.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    store = store or build_blob_store(settings)
    dispatcher = build_dispatcher(settings, store)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "Starting 3D storage MCP server",
            version=settings.service_version,
            backend=store.name,
            tools=dispatcher.registry.names(),
        )
        yield
        await store.close()
        logger.info("Shutting down 3D storage MCP server")

    app = FastAPI(
        title=settings.service_name,
        description="MCP tools for uploading 3D models and publishing viewer pages",
        version=settings.service_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.dispatcher = dispatcher

    app.add_exception_handler(Exception, general_exception_handler)

    discovery = build_discovery_document(
        dispatcher,
        store_info=store.info(),
        required_keys=settings.required_keys,
        optional_keys=settings.optional_keys,
    )
    app.include_router(create_mcp_router(dispatcher, discovery), prefix="/api")

    @app.get("/health", tags=["health"])
    async def health_check() -> dict:
        """Report service status and whether the storage backend answers."""
        healthy = True
        try:
            healthy = await store.health_check()
        except Exception as exc:
            logger.warning("Storage health check failed", backend=store.name, error=str(exc))
            healthy = False
        return {
            "status": "healthy" if healthy else "degraded",
            "service": settings.service_name,
            "version": settings.service_version,
            "backend": store.name,
        }

    return app


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle exceptions escaping non-MCP routes."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "type": "internal_error"},
    )


def run() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
