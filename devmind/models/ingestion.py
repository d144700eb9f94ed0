"""
Ingestion API contracts.

Dependencies: pydantic
System role: Ingestion endpoint response schema
"""

from pydantic import Field

from devmind.models.chunk import SourceType
from devmind.models.common import CamelModel


class IngestResponse(CamelModel):
    """Successful ingestion summary used to register the new source."""

    success: bool = True
    chunks: int = Field(description="Number of chunks upserted")
    source_name: str = Field(description="Human-readable source label")
    source_type: SourceType
