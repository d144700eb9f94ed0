"""
Workspace insight endpoints.

Routes:
- POST /workspaces/overview - Three-act overview and suggested questions
- POST /workspaces/mindmap - Mind map graph of the main themes

Dependencies: devmind.application.services.insight_service
System role: Workspace insight HTTP API
"""

from fastapi import APIRouter, Depends

from devmind.api.deps import get_insight_service
from devmind.api.routers.error_handling import handle_api_errors
from devmind.application.services.insight_service import InsightService
from devmind.models.common import ErrorResponse
from devmind.models.insights import MindMapResponse, WorkspaceOverview, WorkspaceRequest

router = APIRouter(prefix="/workspaces", tags=["insights"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post("/overview", response_model=WorkspaceOverview, responses=ERROR_RESPONSES)
@handle_api_errors
async def workspace_overview(
    request: WorkspaceRequest,
    insight_service: InsightService = Depends(get_insight_service),
) -> WorkspaceOverview:
    """Synthesize an overview of a workspace."""
    return await insight_service.overview(request.workspace_id)


@router.post("/mindmap", response_model=MindMapResponse, responses=ERROR_RESPONSES)
@handle_api_errors
async def workspace_mindmap(
    request: WorkspaceRequest,
    insight_service: InsightService = Depends(get_insight_service),
) -> MindMapResponse:
    """Build the mind map graph of a workspace."""
    return await insight_service.mindmap(request.workspace_id)
