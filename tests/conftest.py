"""
Shared test fixtures and configuration for entire test suite.

Provides: Fake embedding client, fake vector store, fake clock/sleep,
embedding cache and chunk factories
Dependencies: pytest, devmind
System role: Test infrastructure and fixture management
"""

from collections.abc import Callable

import pytest

from devmind.core.embedding_cache import EmbeddingCache
from devmind.models.chunk import Chunk, ChunkMetadata, SourceType
from tests.fakes import FakeClock, FakeEmbedder, FakeSleep, FakeVectorStore


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide manually advanced clock."""
    return FakeClock()


@pytest.fixture
def fake_sleep(fake_clock: FakeClock) -> FakeSleep:
    """Provide recording sleep bound to the fake clock."""
    return FakeSleep(fake_clock)


@pytest.fixture
def embedding_cache(fake_clock: FakeClock, fake_sleep: FakeSleep) -> EmbeddingCache:
    """Provide embedding cache driven by the fake clock."""
    return EmbeddingCache(clock=fake_clock, sleep=fake_sleep)


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    """Provide fake embedding client."""
    return FakeEmbedder()


@pytest.fixture
def fake_store() -> FakeVectorStore:
    """Provide fake vector store."""
    return FakeVectorStore()


@pytest.fixture
def make_text_chunks() -> Callable[[int, str], list[Chunk]]:
    """Provide factory for raw text chunks."""

    def factory(count: int, workspace_id: str = "ws-1") -> list[Chunk]:
        return [
            Chunk(
                text=f"chunk number {i}",
                source_type=SourceType.TEXT,
                source_label="Raw Text",
                workspace_id=workspace_id,
            )
            for i in range(count)
        ]

    return factory


@pytest.fixture
def pdf_metadata() -> ChunkMetadata:
    """Provide metadata of a PDF chunk on page 3."""
    return ChunkMetadata(
        text="Gradient descent minimizes the loss.",
        source="notes.pdf",
        source_type=SourceType.PDF,
        page=3,
        workspace_id="ws-1",
    )


@pytest.fixture
def code_metadata() -> ChunkMetadata:
    """Provide metadata of a code chunk covering lines 101-200."""
    return ChunkMetadata(
        text="def train(model):\n    ...",
        source="acme/trainer/src/train.py",
        source_type=SourceType.GITHUB,
        page="L101-L200",
        workspace_id="ws-1",
        file_path="src/train.py",
        line_start=101,
        line_end=200,
        repo_url="acme/trainer",
    )
