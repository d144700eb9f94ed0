"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, devmind.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devmind.api.deps.dependencies import get_service_cache
from devmind.configs import get_settings
from devmind.observability.logger import configure_logging
from .routers import (
    chat_router,
    citations_router,
    health_router,
    ingest_router,
    insights_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    logger = logging.getLogger("uvicorn")

    yield

    # Shutdown
    get_service_cache().clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    configure_logging(get_settings().log_level)

    app = FastAPI(
        title="DevMind Workspace API",
        description="Per-workspace knowledge base with cited question answering",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(ingest_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(insights_router, prefix="/api/v1")
    app.include_router(citations_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "devmind.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
