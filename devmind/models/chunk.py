"""
Chunk domain model.

Represents one retrievable unit of content with the metadata needed to
locate it in its source, and the flat metadata record stored next to its
vector.

Dependencies: pydantic
System role: Chunk data structures shared by ingestion, retrieval and citations
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from devmind.models.common import CamelModel


class SourceType(str, Enum):
    """Kind of source a chunk was extracted from."""

    PDF = "pdf"
    TEXT = "text"
    GITHUB = "github"


class ChunkMetadata(CamelModel):
    """
    Metadata stored with each vector and returned as a retrieval source.

    Optional code fields are omitted entirely when absent because the
    target store rejects null-valued fields.
    """

    text: str = Field(description="Chunk text content")
    source: str = Field(description="Citation label: filename, 'Raw Text' or owner/repo/path")
    source_type: SourceType = Field(description="pdf, text or github")
    page: int | str = Field(default=0, description="Page number, or 'L<start>-L<end>' for code")
    workspace_id: str = Field(description="Owning workspace")
    file_path: str | None = Field(default=None, description="Path relative to repository root")
    line_start: int | None = Field(default=None, description="First line (1-based, inclusive)")
    line_end: int | None = Field(default=None, description="Last line (1-based, inclusive)")
    repo_url: str | None = Field(default=None, description="Repository label owner/repo")

    def to_store_dict(self) -> dict[str, Any]:
        """Serialize for the vector store, omitting absent optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Chunk(BaseModel):
    """Document or code chunk tagged with its owning workspace."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Chunk text content")
    source_type: SourceType
    source_label: str = Field(description="Filename, 'Raw Text' or owner/repo")
    workspace_id: str
    page_number: int = Field(default=0, description="Best-effort page number, 0 if unknown")
    file_path: str | None = None
    line_start: int | None = Field(default=None, ge=1)
    line_end: int | None = Field(default=None, ge=1)
    repo_label: str | None = None

    @model_validator(mode="after")
    def _check_code_fields(self) -> "Chunk":
        code_fields = (self.file_path, self.line_start, self.line_end, self.repo_label)
        if self.source_type is SourceType.GITHUB:
            if any(value is None for value in code_fields):
                raise ValueError("code chunks require file_path, line_start, line_end and repo_label")
            if self.line_end < self.line_start:
                raise ValueError("line_end must not precede line_start")
        elif any(value is not None for value in code_fields):
            raise ValueError("document chunks cannot carry code location fields")
        return self

    @property
    def citation_label(self) -> str:
        """Label rendered inside citation tokens."""
        if self.source_type is SourceType.GITHUB:
            return f"{self.repo_label}/{self.file_path}"
        return self.source_label

    @property
    def page_reference(self) -> int | str:
        """Page number for documents, 'L<start>-L<end>' for code."""
        if self.source_type is SourceType.GITHUB:
            return f"L{self.line_start}-L{self.line_end}"
        return self.page_number

    def to_metadata(self) -> ChunkMetadata:
        """Build the flat metadata record stored with the chunk vector."""
        return ChunkMetadata(
            text=self.text,
            source=self.citation_label,
            source_type=self.source_type,
            page=self.page_reference,
            workspace_id=self.workspace_id,
            file_path=self.file_path,
            line_start=self.line_start,
            line_end=self.line_end,
            repo_url=self.repo_label,
        )
