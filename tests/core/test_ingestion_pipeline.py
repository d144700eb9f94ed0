"""
Test suite for IngestionPipeline.

System role: Verification of ingestion orchestration
"""

import pytest

from devmind.core.exceptions import BatchUpsertError, ValidationError
from devmind.core.ingestion import IngestionPipeline, LoadedSource
from devmind.core.ingestion.tasks import RepositoryLoaderTask, VectorUpsertTask
from devmind.models.chunk import SourceType
from tests.fakes import TEST_DIMENSION


@pytest.fixture
def pipeline(fake_embedder, fake_store, embedding_cache) -> IngestionPipeline:
    """Provide pipeline with a repository loader whose clone writes one file."""

    def clone(url, destination):
        destination.mkdir(parents=True)
        (destination / "app.py").write_text("print('hi')\n")

    return IngestionPipeline(
        upsert_task=VectorUpsertTask(
            embedder=fake_embedder,
            vector_store=fake_store,
            cache=embedding_cache,
            expected_dimension=TEST_DIMENSION,
        ),
        repository_loader=RepositoryLoaderTask(clone=clone),
    )


class TestIngestText:
    """Test suite for raw text ingestion."""

    @pytest.mark.asyncio
    async def test_ingest_text_should_store_single_chunk(self, pipeline, fake_store) -> None:
        """Should ingest 'Hello world' as one text chunk labelled Raw Text."""
        result = await pipeline.ingest_text("Hello world", "ws-1")

        assert result.chunk_count == 1
        assert result.source_type is SourceType.TEXT
        assert result.source_label == "Raw Text"
        _, records = fake_store.upserts[0]
        assert records[0].metadata.to_store_dict() == {
            "text": "Hello world",
            "source": "Raw Text",
            "sourceType": "text",
            "page": 0,
            "workspaceId": "ws-1",
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   \n"])
    async def test_ingest_text_should_reject_blank_text(self, pipeline, fake_embedder, text) -> None:
        """Should raise ValidationError without calling the embedder."""
        with pytest.raises(ValidationError, match="No content provided"):
            await pipeline.ingest_text(text, "ws-1")

        assert fake_embedder.batch_calls == []

    @pytest.mark.asyncio
    async def test_ingest_text_should_require_workspace(self, pipeline) -> None:
        """Should raise ValidationError for a missing workspace id."""
        with pytest.raises(ValidationError, match="Workspace ID is required"):
            await pipeline.ingest_text("Hello world", "")


class TestIngestRepository:
    """Test suite for repository ingestion."""

    @pytest.mark.asyncio
    async def test_ingest_repository_should_label_with_owner_and_repo(self, pipeline, fake_store) -> None:
        """Should report the owner/repo label and store code metadata."""
        result = await pipeline.ingest_repository("https://github.com/acme/widgets", "ws-1")

        assert result.source_label == "acme/widgets"
        assert result.source_type is SourceType.GITHUB
        assert result.chunk_count == 1
        _, records = fake_store.upserts[0]
        assert records[0].metadata.page == "L1-L1"
        assert records[0].metadata.source == "acme/widgets/app.py"

    @pytest.mark.asyncio
    async def test_ingest_repository_should_reject_invalid_url(self, pipeline, fake_store) -> None:
        """Should surface ValidationError with no side effects."""
        with pytest.raises(ValidationError):
            await pipeline.ingest_repository("not a url", "ws-1")

        assert fake_store.upserts == []


class TestResume:
    """Test suite for resuming a partially indexed job."""

    @staticmethod
    def _clone_large_repository(url, destination):
        destination.mkdir(parents=True)
        (destination / "big.py").write_text("\n".join(f"x = {n}" for n in range(6000)) + "\n")

    @pytest.mark.asyncio
    async def test_resume_should_complete_job_with_identical_ids(
        self, fake_embedder, fake_store, embedding_cache
    ) -> None:
        """Should index the remaining batches under the stamp of the failed job."""
        loader = RepositoryLoaderTask(clone=self._clone_large_repository)
        pipeline = IngestionPipeline(
            upsert_task=VectorUpsertTask(
                embedder=fake_embedder,
                vector_store=fake_store,
                cache=embedding_cache,
                expected_dimension=TEST_DIMENSION,
            ),
            repository_loader=loader,
        )
        fake_embedder.error = RuntimeError("quota exceeded")
        fake_embedder.fail_on_batch = 1

        with pytest.raises(BatchUpsertError) as exc_info:
            await pipeline.ingest_repository("https://github.com/acme/big", "ws-1")

        failure = exc_info.value
        assert failure.failed_batch == 1
        assert len(fake_store.upserts) == 1

        fake_embedder.error = None
        source = loader.load("https://github.com/acme/big", "ws-1")
        result = await pipeline.resume(
            source, "ws-1", job_stamp=failure.job_stamp, start_batch=failure.failed_batch
        )

        assert result.chunk_count == 60
        assert result.batch_count == 2
        assert result.job_stamp == failure.job_stamp
        assert fake_store.stored_ids == [f"ws-1-{failure.job_stamp}-{i}" for i in range(60)]

    @pytest.mark.asyncio
    async def test_resume_should_require_workspace(self, pipeline, make_text_chunks) -> None:
        """Should raise ValidationError before upserting when the workspace id is missing."""
        source = LoadedSource(
            source_label="Raw Text", source_type=SourceType.TEXT, chunks=make_text_chunks(1)
        )

        with pytest.raises(ValidationError, match="Workspace ID is required"):
            await pipeline.resume(source, "", job_stamp=1, start_batch=0)
