"""
Models for the ingestion pipeline.

Dependencies: pydantic, devmind.models.chunk
System role: Intermediate and final results of ingestion
"""

from pydantic import BaseModel, Field

from devmind.models.chunk import Chunk, SourceType


class LoadedSource(BaseModel):
    """Ordered chunks extracted from one source."""

    source_label: str
    source_type: SourceType
    chunks: list[Chunk] = Field(default_factory=list)


class UpsertReport(BaseModel):
    """Outcome of a completed upsert job."""

    job_stamp: int = Field(description="Stamp shared by every vector id of the job")
    batch_count: int = Field(description="Number of batches in the job")
    vector_ids: list[str] = Field(default_factory=list, description="Ids committed by this run")


class IngestionResult(BaseModel):
    """Result of ingesting one source into a workspace."""

    chunk_count: int
    source_label: str
    source_type: SourceType
    job_stamp: int | None = None
    batch_count: int = 0
