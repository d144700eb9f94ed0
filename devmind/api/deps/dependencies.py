"""
Dependency injection container.

Factory functions for FastAPI dependencies. Heavy clients are built lazily
and cached for the lifetime of the process; the embedding cache is a single
instance shared by ingestion and retrieval across all workspaces.

Dependencies: devmind.configs, devmind.application, devmind.boundary
System role: DI container for service injection
"""

from devmind.application.services import ChatService, IngestionService, InsightService
from devmind.configs import get_settings
from devmind.core.citation_builder import CitationResolver
from devmind.core.embedding_cache import EmbeddingCache


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._embedding_cache = None
        self._embedder = None
        self._vector_store = None
        self._chat_client = None
        self._insight_client = None
        self._pipeline = None
        self._retriever = None

    @property
    def embedding_cache(self) -> EmbeddingCache:
        """Get the process-wide embedding cache and rate limiter."""
        if self._embedding_cache is None:
            self._embedding_cache = EmbeddingCache()
        return self._embedding_cache

    @property
    def embedder(self):
        """Get cached Gemini embedding client."""
        if self._embedder is None:
            from devmind.boundary.llm.embeddings_wrapper import GeminiEmbeddingClient
            self._embedder = GeminiEmbeddingClient(get_settings().embedding)
        return self._embedder

    @property
    def vector_store(self):
        """Get cached vector store."""
        if self._vector_store is None:
            from devmind.boundary.vdb.vector_store_factory import get_vector_store
            self._vector_store = get_vector_store(get_settings().vector_store)
        return self._vector_store

    @property
    def chat_client(self):
        """Get cached completion client for question answering."""
        if self._chat_client is None:
            self._chat_client = self._completion_client(get_settings().llm.chat_model)
        return self._chat_client

    @property
    def insight_client(self):
        """Get cached completion client for overview and mind map."""
        if self._insight_client is None:
            self._insight_client = self._completion_client(get_settings().llm.insight_model)
        return self._insight_client

    @property
    def pipeline(self):
        """Get cached ingestion pipeline."""
        if self._pipeline is None:
            from devmind.core.ingestion import IngestionPipeline
            from devmind.core.ingestion.tasks import VectorUpsertTask

            upsert_task = VectorUpsertTask(
                embedder=self.embedder,
                vector_store=self.vector_store,
                cache=self.embedding_cache,
                expected_dimension=get_settings().embedding.dimension,
            )
            self._pipeline = IngestionPipeline(upsert_task=upsert_task)
        return self._pipeline

    @property
    def retriever(self):
        """Get cached workspace retriever."""
        if self._retriever is None:
            from devmind.core.retriever import Retriever
            self._retriever = Retriever(
                embedder=self.embedder,
                vector_store=self.vector_store,
                cache=self.embedding_cache,
            )
        return self._retriever

    @staticmethod
    def _completion_client(model: str):
        from devmind.boundary.llm.chat_client import GeminiCompletionClient

        settings = get_settings()
        return GeminiCompletionClient(
            model=model,
            temperature=settings.llm.temperature,
            max_retries=settings.llm.max_retries,
            google_api_key=settings.embedding.google_api_key or None,
        )

    def clear(self) -> None:
        """Clear all cached instances."""
        if self._embedding_cache is not None:
            self._embedding_cache.clear()
        self._embedding_cache = None
        self._embedder = None
        self._vector_store = None
        self._chat_client = None
        self._insight_client = None
        self._pipeline = None
        self._retriever = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_ingestion_service() -> IngestionService:
    """
    Get ingestion service instance.

    Returns:
        IngestionService: Service backed by the cached ingestion pipeline
    """
    return IngestionService(pipeline=get_service_cache().pipeline)


def get_chat_service() -> ChatService:
    """
    Get chat service instance.

    Uses the vector store selected via VECTOR_STORE_STORE_TYPE (FAISS for dev, S3 for prod).

    Returns:
        ChatService: Chat service with the shared retriever
    """
    cache = get_service_cache()
    return ChatService(
        retriever=cache.retriever,
        completion_client=cache.chat_client,
        top_k=get_settings().retrieval.chat_top_k,
    )


def get_insight_service() -> InsightService:
    """
    Get insight service instance.

    Returns:
        InsightService: Overview and mind map service
    """
    cache = get_service_cache()
    retrieval = get_settings().retrieval
    return InsightService(
        retriever=cache.retriever,
        completion_client=cache.insight_client,
        overview_top_k=retrieval.overview_top_k,
        mindmap_top_k=retrieval.mindmap_top_k,
    )


def get_citation_resolver() -> CitationResolver:
    """Get citation resolver."""
    return CitationResolver()
