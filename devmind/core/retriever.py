"""
Workspace retriever and context assembler.

Embeds a query (cache first), runs a top-K similarity search restricted to
one workspace partition and renders the matches into a citable context.

Dependencies: fastapi.concurrency, devmind.core.embedding_cache, devmind.core.citation_builder
System role: Retrieval stage shared by chat, overview and mind map
"""

import logging

from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from devmind.core.citation_builder import format_citation
from devmind.core.embedding_cache import EmbeddingCache
from devmind.core.exceptions import ValidationError
from devmind.models.chunk import ChunkMetadata
from devmind.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n---\n\n"


class RetrievalResult(BaseModel):
    """Matched chunk metadata, most similar first, plus the rendered context."""

    context: str = ""
    sources: list[ChunkMetadata] = Field(default_factory=list)

    @property
    def has_matches(self) -> bool:
        return bool(self.sources)


def render_context(sources: list[ChunkMetadata]) -> str:
    """
    Render sources as citation-tagged blocks in the given order.

    Each block is the citation token on its own line followed by the chunk
    text; blocks are separated by a horizontal rule.
    """
    return CONTEXT_SEPARATOR.join(
        f"{format_citation(source.source, source.page)}\n{source.text}" for source in sources
    )


class Retriever:
    """Top-K retrieval over one workspace partition."""

    def __init__(self, embedder, vector_store, cache: EmbeddingCache) -> None:
        """
        Initialize retriever.

        Args:
            embedder: Client exposing async embed(text)
            vector_store: Store exposing query(partition, vector, top_k)
            cache: Shared embedding cache and limiter
        """
        self._embedder = embedder
        self._vector_store = vector_store
        self._cache = cache

    async def embed_query(self, text: str) -> list[float]:
        """Return a cached embedding, or embed through the limiter and cache it."""
        cached = self._cache.lookup(text)
        if cached is not None:
            return cached

        await self._cache.throttle()
        vector = await self._embedder.embed(text)
        self._cache.store(text, vector)
        return vector

    async def retrieve(self, workspace_id: str, query: str, top_k: int) -> RetrievalResult:
        """
        Retrieve the top_k chunks of a workspace for a query.

        Args:
            workspace_id: Partition to search
            query: Query text
            top_k: Maximum number of matches

        Returns:
            RetrievalResult: Empty when the workspace has no matching chunks

        Raises:
            ValidationError: Missing workspace id or query
            UpstreamRateLimited: Embedding call throttled upstream
            UpstreamFailure: Embedding or vector query failed
        """
        if not workspace_id:
            raise ValidationError("Workspace ID is required", field="workspaceId")
        if not query or not query.strip():
            raise ValidationError("No question provided", field="messages")

        vector = await self.embed_query(query)
        matches = await run_in_threadpool(self._vector_store.query, workspace_id, vector, top_k)

        logger.info(
            f"{__name__}:retrieve - Found {len(matches)} matches for '{safe_log_value(query, 50)}'",
            extra={"workspace_id": workspace_id, "top_k": top_k},
        )
        if not matches:
            return RetrievalResult()

        sources = [match.metadata for match in matches]
        return RetrievalResult(context=render_context(sources), sources=sources)
