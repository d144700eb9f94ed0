"""
Chat domain models and schemas.

Request/response schemas for workspace question answering.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import Field

from devmind.models.chunk import ChunkMetadata
from devmind.models.citation import ResolvedCitation
from devmind.models.common import CamelModel


class ChatMessage(CamelModel):
    """Single chat message."""

    role: str = Field(default="user", description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")


class ChatRequest(CamelModel):
    """Request schema for workspace questions; the last message is the question."""

    messages: list[ChatMessage] = Field(default_factory=list)
    workspace_id: str | None = Field(default=None, description="Workspace to search")


class ChatResponse(CamelModel):
    """Answer with the retrieved sources and resolved citations."""

    response: str
    sources: list[ChunkMetadata] = Field(default_factory=list)
    citations: list[ResolvedCitation] = Field(default_factory=list)
