"""
Ingestion service.

Validates an ingestion request carrying exactly one source (single PDF,
multiple PDFs, raw text or repository URL) and runs it through the
ingestion pipeline.

Dependencies: devmind.core.ingestion
System role: Ingestion service orchestration layer
"""

import logging

from devmind.core.exceptions import ValidationError
from devmind.core.ingestion import IngestionPipeline, IngestionResult
from devmind.models.ingestion import IngestResponse

logger = logging.getLogger(__name__)

Upload = tuple[str, bytes]


class IngestionService:
    """Route one ingestion request to the matching pipeline entry."""

    def __init__(self, pipeline: IngestionPipeline) -> None:
        self.pipeline = pipeline

    async def ingest(
        self,
        workspace_id: str | None,
        file: Upload | None = None,
        files: list[Upload] | None = None,
        text: str | None = None,
        repo_url: str | None = None,
    ) -> IngestResponse:
        """
        Ingest one source into a workspace.

        Args:
            workspace_id: Owning workspace
            file: Single PDF upload as (filename, content)
            files: Multiple PDF uploads
            text: Raw pasted text
            repo_url: Public GitHub repository URL

        Returns:
            IngestResponse: Chunk count and the label to register the source under

        Raises:
            ValidationError: Missing workspace, no content, several sources or bad URL
            UpstreamFailure: Parsing, clone, embedding or upsert failed
        """
        if not workspace_id or not workspace_id.strip():
            raise ValidationError("Workspace ID is required", field="workspaceId")

        provided = [
            name
            for name, value in (("file", file), ("files", files), ("text", text), ("repoUrl", repo_url))
            if value
        ]
        if not provided:
            raise ValidationError("No content provided")
        if len(provided) > 1:
            raise ValidationError(
                f"Provide exactly one of file, files, text or repoUrl (got {', '.join(provided)})"
            )

        result = await self._dispatch(workspace_id, file, files, text, repo_url)
        logger.info(
            f"{__name__}:ingest - Ingested {provided[0]} source",
            extra={"workspace_id": workspace_id, "chunks": result.chunk_count},
        )
        return IngestResponse(
            chunks=result.chunk_count,
            source_name=result.source_label,
            source_type=result.source_type,
        )

    async def _dispatch(
        self,
        workspace_id: str,
        file: Upload | None,
        files: list[Upload] | None,
        text: str | None,
        repo_url: str | None,
    ) -> IngestionResult:
        if file:
            return await self.pipeline.ingest_pdfs([file], workspace_id)
        if files:
            return await self.pipeline.ingest_pdfs(
                files, workspace_id, source_label=f"{len(files)} files"
            )
        if text:
            return await self.pipeline.ingest_text(text, workspace_id)
        return await self.pipeline.ingest_repository(repo_url, workspace_id)
