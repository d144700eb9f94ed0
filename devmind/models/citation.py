"""
Citation domain models.

Citation tokens parsed out of generated answers and their resolution
against the chunks of the retrieval that produced the answer.

Dependencies: pydantic
System role: Citation data structures
"""

from pydantic import Field

from devmind.models.chunk import ChunkMetadata
from devmind.models.common import CamelModel


class CitationToken(CamelModel):
    """One `[Source: <label>, Page <page-or-range>]` token."""

    raw: str = Field(description="Token exactly as it appeared in the answer")
    label: str = Field(description="Source label or repository file path")
    page: str = Field(description="Page number or 'L<start>-L<end>' range as written")
    line_start: int | None = None
    line_end: int | None = None

    @property
    def is_line_range(self) -> bool:
        return self.line_start is not None and self.line_end is not None


class ResolvedCitation(CamelModel):
    """Citation resolution result; `found` is False for placeholders."""

    label: str
    page: str
    found: bool
    text: str = Field(description="Chunk text, or a not-found marker for placeholders")
    chunk: ChunkMetadata | None = None


class CitationResolveRequest(CamelModel):
    """Answer text plus the sources returned with it."""

    answer: str
    sources: list[ChunkMetadata] = Field(default_factory=list)


class CitationResolveResponse(CamelModel):
    """Resolved citations in order of appearance."""

    citations: list[ResolvedCitation]
    grammar_version: int = Field(description="Version of the citation token grammar")
