"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_chat_service,
    get_citation_resolver,
    get_ingestion_service,
    get_insight_service,
    get_service_cache,
)

__all__ = [
    "get_chat_service",
    "get_citation_resolver",
    "get_ingestion_service",
    "get_insight_service",
    "get_service_cache",
]
