"""
Citation grammar and resolver.

The token grammar is a versioned contract shared by the context assembler
(which renders tokens into the prompt), the completion model (which copies
them into answers) and the resolver (which maps them back to chunks):

    [Source: <label>, Page <page>]

where <page> is a page number for documents or 'L<start>-L<end>' for code.

Dependencies: re, devmind.models.citation
System role: Maps answer citations back to retrieved chunks
"""

import logging
import re

from devmind.models.chunk import ChunkMetadata
from devmind.models.citation import CitationToken, ResolvedCitation

logger = logging.getLogger(__name__)

CITATION_GRAMMAR_VERSION = 1

CITATION_PATTERN = re.compile(r"\[Source: (?P<label>[^\[\]]+?), Page (?P<page>[^\[\]]+)\]")
LINE_RANGE_PATTERN = re.compile(r"^L(?P<start>\d+)-L(?P<end>\d+)$")

NOT_FOUND_TEXT = "Specific text chunk not found in retrieved context."


def format_citation(label: str, page: int | str) -> str:
    """Render a citation token."""
    return f"[Source: {label}, Page {page}]"


def parse_citations(text: str) -> list[CitationToken]:
    """
    Extract citation tokens from an answer, in order of appearance.

    Args:
        text: Generated answer

    Returns:
        list[CitationToken]: Parsed tokens; duplicates are kept
    """
    tokens = []
    for match in CITATION_PATTERN.finditer(text):
        page = match["page"].strip()
        line_range = LINE_RANGE_PATTERN.match(page)
        tokens.append(
            CitationToken(
                raw=match.group(0),
                label=match["label"].strip(),
                page=page,
                line_start=int(line_range["start"]) if line_range else None,
                line_end=int(line_range["end"]) if line_range else None,
            )
        )
    return tokens


class CitationResolver:
    """Resolve citation tokens against the sources of one retrieval."""

    def resolve(self, token: CitationToken, sources: list[ChunkMetadata]) -> ResolvedCitation:
        """
        Find the chunk a token refers to.

        An exact label match wins over a repository-path suffix match. A token
        that matches nothing yields a placeholder with found=False.
        """
        page_matches = [s for s in sources if self._page_matches(token, s)]
        match = next((s for s in page_matches if s.source == token.label), None)
        if match is None:
            match = next((s for s in page_matches if self._path_matches(token.label, s)), None)

        if match is None:
            logger.debug(f"{__name__}:resolve - Unresolved citation {token.raw}")
            return ResolvedCitation(
                label=token.label, page=token.page, found=False, text=NOT_FOUND_TEXT
            )

        return ResolvedCitation(
            label=token.label, page=token.page, found=True, text=match.text, chunk=match
        )

    def resolve_all(self, answer: str, sources: list[ChunkMetadata]) -> list[ResolvedCitation]:
        """Resolve every token of an answer, in order of appearance."""
        return [self.resolve(token, sources) for token in parse_citations(answer)]

    @staticmethod
    def _page_matches(token: CitationToken, source: ChunkMetadata) -> bool:
        if token.is_line_range and source.line_start is not None:
            return source.line_start == token.line_start and source.line_end == token.line_end
        return str(source.page) == token.page

    @staticmethod
    def _path_matches(label: str, source: ChunkMetadata) -> bool:
        if not source.file_path:
            return False
        return label == source.file_path or label.endswith("/" + source.file_path)
