"""API routers."""

from .chat import router as chat_router
from .citations import router as citations_router
from .health import router as health_router
from .ingest import router as ingest_router
from .insights import router as insights_router

__all__ = [
    "chat_router",
    "citations_router",
    "health_router",
    "ingest_router",
    "insights_router",
]
