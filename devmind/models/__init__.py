"""
Domain models and API schemas.
"""

from devmind.models.chunk import Chunk, ChunkMetadata, SourceType
from devmind.models.citation import CitationToken, ResolvedCitation

__all__ = ["Chunk", "ChunkMetadata", "SourceType", "CitationToken", "ResolvedCitation"]
