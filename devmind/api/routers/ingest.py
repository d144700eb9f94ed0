"""
Ingestion API endpoint.

Routes:
- POST /ingest - Ingest one PDF, several PDFs, raw text or a GitHub repository

Dependencies: devmind.application.services.ingestion_service
System role: Source ingestion HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from devmind.api.deps import get_ingestion_service
from devmind.api.routers.error_handling import handle_api_errors
from devmind.application.services.ingestion_service import IngestionService, Upload
from devmind.models.common import ErrorResponse
from devmind.models.ingestion import IngestResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ingest"])


async def _read_upload(upload: UploadFile) -> Upload:
    return upload.filename or "upload.pdf", await upload.read()


@router.post(
    "/ingest",
    response_model=IngestResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@handle_api_errors
async def ingest(
    workspace_id: str | None = Form(default=None, alias="workspaceId"),
    text: str | None = Form(default=None),
    repo_url: str | None = Form(default=None, alias="repoUrl"),
    file: UploadFile | None = File(default=None),
    files: list[UploadFile] | None = File(default=None),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestResponse:
    """
    Ingest exactly one source into a workspace.

    Args:
        workspace_id: Owning workspace (form field workspaceId)
        text: Raw pasted text
        repo_url: Public GitHub repository URL (form field repoUrl)
        file: Single PDF upload
        files: Multiple PDF uploads
        ingestion_service: Injected IngestionService

    Returns:
        IngestResponse: Chunk count, source name and source type
    """
    single = await _read_upload(file) if file is not None else None
    multiple = [await _read_upload(upload) for upload in files] if files else None

    return await ingestion_service.ingest(
        workspace_id=workspace_id,
        file=single,
        files=multiple,
        text=text,
        repo_url=repo_url,
    )
