"""
Chat service for workspace question answering.

Orchestrates the chat flow: retrieval, grounded completion and citation
resolution. The completion model is not called when the workspace has no
matching chunks.

Dependencies: devmind.core.retriever, devmind.core.citation_builder, devmind.core.prompts
System role: Chat service orchestration layer
"""

import logging

from devmind.core.citation_builder import CitationResolver
from devmind.core.exceptions import ValidationError
from devmind.core.prompts import CHAT_PROMPT, INSUFFICIENT_INFORMATION_MESSAGE
from devmind.core.retriever import Retriever
from devmind.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)


class ChatService:
    """
    Chat service for grounded Q&A over one workspace.

    Only the last message of the conversation is used as the query.
    """

    def __init__(
        self,
        retriever: Retriever,
        completion_client,
        top_k: int,
        resolver: CitationResolver | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            retriever: Workspace retriever
            completion_client: Client exposing async complete(prompt, **variables)
            top_k: Number of chunks retrieved per question
            resolver: Citation resolver
        """
        self.retriever = retriever
        self.completion_client = completion_client
        self.top_k = top_k
        self.resolver = resolver or CitationResolver()

    async def answer(self, request: ChatRequest) -> ChatResponse:
        """
        Answer the last message of a conversation from workspace content.

        Flow:
        1. Validate workspace and question
        2. Retrieve top-K chunks of the workspace
        3. Generate a cited answer (skipped when nothing matched)
        4. Resolve citations against the retrieved chunks

        Args:
            request: Messages and workspace id

        Returns:
            ChatResponse: Answer, sources in retrieval order and resolved citations

        Raises:
            ValidationError: Missing workspace id or question
            UpstreamRateLimited: Embedding or completion throttled upstream
            UpstreamFailure: Any other upstream failure
        """
        if not request.workspace_id:
            raise ValidationError("Workspace ID is required", field="workspaceId")
        if not request.messages or not request.messages[-1].content.strip():
            raise ValidationError("No question provided", field="messages")

        question = request.messages[-1].content
        retrieval = await self.retriever.retrieve(request.workspace_id, question, self.top_k)

        if not retrieval.has_matches:
            logger.info(
                f"{__name__}:answer - No matches, skipping completion",
                extra={"workspace_id": request.workspace_id},
            )
            return ChatResponse(response=INSUFFICIENT_INFORMATION_MESSAGE, sources=[])

        answer = await self.completion_client.complete(
            CHAT_PROMPT, context=retrieval.context, question=question
        )
        citations = self.resolver.resolve_all(answer, retrieval.sources)

        logger.info(
            f"{__name__}:answer - Answered with {len(retrieval.sources)} sources",
            extra={
                "workspace_id": request.workspace_id,
                "citations": len(citations),
                "unresolved": sum(1 for c in citations if not c.found),
            },
        )
        return ChatResponse(response=answer, sources=retrieval.sources, citations=citations)
