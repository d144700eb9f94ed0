"""
Ingestion pipeline orchestrator.

Coordinates parsing, chunking and batched vector upsert for raw text,
PDF uploads and GitHub repositories.

Dependencies: All task modules, fastapi.concurrency
System role: Pipeline orchestration (coordinates only)
"""

import logging

from fastapi.concurrency import run_in_threadpool
from langchain_core.documents import Document

from devmind.core.exceptions import ValidationError
from devmind.models.chunk import SourceType

from .models import IngestionResult, LoadedSource
from .policy import RAW_TEXT_LABEL
from .tasks import (
    PdfParsingTask,
    RepositoryLoaderTask,
    TextChunkingTask,
    VectorUpsertTask,
)

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Orchestrate ingestion: load -> chunk -> embed+upsert."""

    def __init__(
        self,
        upsert_task: VectorUpsertTask,
        repository_loader: RepositoryLoaderTask | None = None,
        parsing_task: PdfParsingTask | None = None,
        chunking_task: TextChunkingTask | None = None,
    ) -> None:
        """
        Initialize pipeline with its tasks.

        Args:
            upsert_task: Batched embed and upsert task
            repository_loader: GitHub loader (default clones with git)
            parsing_task: PDF parser
            chunking_task: Text chunker
        """
        self._upsert_task = upsert_task
        self._repository_loader = repository_loader or RepositoryLoaderTask()
        self._parsing_task = parsing_task or PdfParsingTask()
        self._chunking_task = chunking_task or TextChunkingTask()

    async def ingest_text(self, text: str, workspace_id: str) -> IngestionResult:
        """Ingest raw pasted text, labelled 'Raw Text'."""
        _require_workspace(workspace_id)
        if not text or not text.strip():
            raise ValidationError("No content provided", field="text")

        document = Document(page_content=text, metadata={"source": RAW_TEXT_LABEL})
        chunks = self._chunking_task.chunk([document], workspace_id, SourceType.TEXT)
        return await self._index(
            LoadedSource(source_label=RAW_TEXT_LABEL, source_type=SourceType.TEXT, chunks=chunks),
            workspace_id,
        )

    async def ingest_pdfs(
        self,
        files: list[tuple[str, bytes]],
        workspace_id: str,
        source_label: str | None = None,
    ) -> IngestionResult:
        """
        Ingest one or more PDF uploads as a single job.

        Args:
            files: (filename, content) pairs
            workspace_id: Owning workspace
            source_label: Response label (filename for one file, 'N files' otherwise)

        Returns:
            IngestionResult: Chunk count and labels
        """
        _require_workspace(workspace_id)
        if not files:
            raise ValidationError("No content provided", field="file")

        documents: list[Document] = []
        for filename, content in files:
            documents.extend(await run_in_threadpool(self._parsing_task.parse, content, filename))

        chunks = self._chunking_task.chunk(documents, workspace_id, SourceType.PDF)
        label = source_label or (files[0][0] if len(files) == 1 else f"{len(files)} files")
        return await self._index(
            LoadedSource(source_label=label, source_type=SourceType.PDF, chunks=chunks),
            workspace_id,
        )

    async def ingest_repository(self, repo_url: str, workspace_id: str) -> IngestionResult:
        """Clone and ingest a public GitHub repository."""
        _require_workspace(workspace_id)
        source = await run_in_threadpool(self._repository_loader.load, repo_url, workspace_id)
        return await self._index(source, workspace_id)

    async def resume(
        self,
        source: LoadedSource,
        workspace_id: str,
        job_stamp: int,
        start_batch: int,
    ) -> IngestionResult:
        """
        Resume a job that failed with BatchUpsertError.

        The same chunks must be supplied in the same order.
        """
        _require_workspace(workspace_id)
        return await self._index(source, workspace_id, job_stamp=job_stamp, start_batch=start_batch)

    async def _index(
        self,
        source: LoadedSource,
        workspace_id: str,
        job_stamp: int | None = None,
        start_batch: int = 0,
    ) -> IngestionResult:
        if not source.chunks:
            logger.warning(
                f"{__name__}:_index - No chunks extracted from {source.source_label}",
                extra={"workspace_id": workspace_id},
            )

        report = await self._upsert_task.upsert(
            source.chunks, workspace_id, job_stamp=job_stamp, start_batch=start_batch
        )
        logger.info(
            f"{__name__}:_index - Ingested {len(source.chunks)} chunks from {source.source_label}",
            extra={"workspace_id": workspace_id, "job_stamp": report.job_stamp},
        )
        return IngestionResult(
            chunk_count=len(source.chunks),
            source_label=source.source_label,
            source_type=source.source_type,
            job_stamp=report.job_stamp,
            batch_count=report.batch_count,
        )


def _require_workspace(workspace_id: str | None) -> None:
    if not workspace_id or not workspace_id.strip():
        raise ValidationError("Workspace ID is required", field="workspaceId")
