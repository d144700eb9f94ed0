"""
Application services.

Exports: ChatService, IngestionService, InsightService
"""

from .chat_service import ChatService
from .ingestion_service import IngestionService
from .insight_service import InsightService

__all__ = ["ChatService", "IngestionService", "InsightService"]
