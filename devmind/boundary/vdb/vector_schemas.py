"""
Vector database schemas.

Pydantic models for vector operations (records to upsert, query matches).
Used for type-safe vector store interactions.

Dependencies: pydantic, devmind.models.chunk
System role: Type definitions for vector operations
"""

from pydantic import BaseModel, Field

from devmind.models.chunk import ChunkMetadata


class VectorRecord(BaseModel):
    """One vector to upsert into a workspace partition."""

    id: str = Field(description="Deterministic vector id '{workspace}-{jobStamp}-{sequence}'")
    values: list[float] = Field(description="Embedding vector")
    metadata: ChunkMetadata


class VectorMatch(BaseModel):
    """Single result from a similarity query, most similar first."""

    id: str = Field(description="Vector id")
    score: float = Field(description="Similarity score, higher is closer")
    metadata: ChunkMetadata
