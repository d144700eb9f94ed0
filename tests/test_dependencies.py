"""
Test suite for dependency injection container.

Tests factory functions for service creation and the shared caches of
ServiceCache. Upstream clients are replaced with fakes so no API key is
needed.

System role: Verification of DI container
"""

import pytest

from devmind.api.deps.dependencies import (
    ServiceCache,
    get_chat_service,
    get_ingestion_service,
    get_insight_service,
    get_service_cache,
)
from devmind.application.services import ChatService, IngestionService, InsightService
from devmind.configs import get_settings
from tests.fakes import FakeCompletionClient, FakeEmbedder, FakeVectorStore


@pytest.fixture
def service_cache():
    """Provide the global service cache pre-populated with fakes, cleared afterwards."""
    cache = get_service_cache()
    cache._embedder = FakeEmbedder(dimension=get_settings().embedding.dimension)
    cache._vector_store = FakeVectorStore()
    cache._chat_client = FakeCompletionClient()
    cache._insight_client = FakeCompletionClient()
    yield cache
    cache.clear()


class TestServiceCache:
    """Test suite for ServiceCache."""

    def test_embedding_cache_should_be_shared(self, service_cache: ServiceCache) -> None:
        """Should hand the same cache to ingestion and retrieval."""
        pipeline_cache = service_cache.pipeline._upsert_task._cache
        retriever_cache = service_cache.retriever._cache

        assert pipeline_cache is retriever_cache is service_cache.embedding_cache

    def test_clear_should_drop_cached_instances(self) -> None:
        """Should rebuild instances after clear."""
        cache = ServiceCache()
        first = cache.embedding_cache

        cache.clear()

        assert cache.embedding_cache is not first


class TestServiceFactories:
    """Test suite for service factory functions."""

    def test_get_chat_service_should_use_configured_top_k(self, service_cache: ServiceCache) -> None:
        """Should build ChatService with the chat retrieval window."""
        service = get_chat_service()

        assert isinstance(service, ChatService)
        assert service.top_k == get_settings().retrieval.chat_top_k
        assert service.completion_client is service_cache.chat_client

    def test_get_insight_service_should_use_insight_client(self, service_cache: ServiceCache) -> None:
        """Should build InsightService with the insight model client."""
        service = get_insight_service()

        assert isinstance(service, InsightService)
        assert service.completion_client is service_cache.insight_client
        assert service.overview_top_k == get_settings().retrieval.overview_top_k

    def test_get_ingestion_service_should_share_pipeline(self, service_cache: ServiceCache) -> None:
        """Should reuse the cached ingestion pipeline."""
        service = get_ingestion_service()

        assert isinstance(service, IngestionService)
        assert service.pipeline is service_cache.pipeline
