"""
Chat API endpoint.

Routes:
- POST /chat - Answer the last message from workspace content

Dependencies: devmind.application.services.chat_service
System role: Workspace question answering HTTP API
"""

from fastapi import APIRouter, Depends

from devmind.api.deps import get_chat_service
from devmind.api.routers.error_handling import handle_api_errors
from devmind.application.services.chat_service import ChatService
from devmind.models.chat import ChatRequest, ChatResponse
from devmind.models.common import ErrorResponse

router = APIRouter(tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
@handle_api_errors
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Answer a question with cited sources from one workspace."""
    return await chat_service.answer(request)
