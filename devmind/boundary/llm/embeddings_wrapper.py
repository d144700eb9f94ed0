"""
Google Generative AI Embeddings wrapper with fixed output dimensionality.

Wraps GoogleGenerativeAIEmbeddings to ensure consistent vector dimensions
across all embedding calls, and exposes the async embed/embed_batch
contract used by ingestion and retrieval.

Dependencies: langchain_google_genai, fastapi.concurrency
System role: Embedding model adapter
"""

import logging
import os

from dotenv import load_dotenv
from fastapi.concurrency import run_in_threadpool
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from devmind.boundary.llm.errors import classify_upstream_error
from devmind.configs.embedding import EmbeddingSettings

load_dotenv()
logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    GoogleGenerativeAIEmbeddings wrapper with fixed output dimensionality.

    The base class ignores output_dimensionality in the constructor, so every
    embed call forwards the configured dimension explicitly.
    """

    _output_dimensionality: int = 768

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 768,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings with fixed output dimensionality.

        Args:
            model: Google embedding model ID
            output_dimensionality: Fixed dimension for all embeddings
            **kwargs: Additional arguments for GoogleGenerativeAIEmbeddings
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    def embed_documents(
        self,
        texts: list[str],
        *,
        batch_size: int = 100,
        task_type: str | None = None,
        titles: list[str] | None = None,
        output_dimensionality: int | None = None,
    ) -> list[list[float]]:
        """
        Embed documents with fixed output dimensionality.

        Args:
            texts: List of texts to embed
            batch_size: Batch size for API calls
            task_type: Optional task type for embedding
            titles: Optional titles for documents
            output_dimensionality: Override dimension (uses configured if None)

        Returns:
            List of embedding vectors
        """
        dim = output_dimensionality or self._output_dimensionality
        return super().embed_documents(
            texts,
            batch_size=batch_size,
            task_type=task_type,
            titles=titles,
            output_dimensionality=dim,
        )

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> list[float]:
        """
        Embed query with fixed output dimensionality.

        Args:
            text: Query text to embed
            task_type: Optional task type for embedding
            title: Optional title
            output_dimensionality: Override dimension (uses configured if None)

        Returns:
            Embedding vector
        """
        dim = output_dimensionality or self._output_dimensionality
        return super().embed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=dim,
        )


class GeminiEmbeddingClient:
    """Async embedding client; one upstream call per method invocation."""

    def __init__(self, settings: EmbeddingSettings) -> None:
        """
        Initialize the Gemini embedding client.

        Args:
            settings: Embedding model settings

        Raises:
            ValueError: When no Google API key is configured
        """
        api_key = settings.google_api_key or os.getenv("GOOGLE_API_KEY", "")
        if not api_key:
            raise ValueError("GOOGLE_API_KEY is missing from environment variables.")

        self.dimension = settings.dimension
        self._embeddings = FixedDimensionEmbeddings(
            model=settings.model,
            output_dimensionality=settings.dimension,
            google_api_key=api_key,
        )

    async def embed(self, text: str) -> list[float]:
        """
        Embed a retrieval query.

        Raises:
            UpstreamRateLimited: Upstream reported HTTP 429
            UpstreamFailure: Any other embedding failure
        """
        try:
            return await run_in_threadpool(
                self._embeddings.embed_query, text, task_type="RETRIEVAL_QUERY"
            )
        except Exception as e:
            raise classify_upstream_error(e, operation="embed") from e

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Embed document chunks in a single upstream call.

        Raises:
            UpstreamRateLimited: Upstream reported HTTP 429
            UpstreamFailure: Any other embedding failure
        """
        try:
            return await run_in_threadpool(
                self._embeddings.embed_documents,
                texts,
                batch_size=max(len(texts), 1),
                task_type="RETRIEVAL_DOCUMENT",
            )
        except Exception as e:
            raise classify_upstream_error(e, operation="embed_batch") from e
