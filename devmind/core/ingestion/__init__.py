"""
Ingestion pipeline for workspace sources.

Loads PDFs, raw text and GitHub repositories, splits them into chunks and
upserts their embeddings into the workspace partition.

Dependencies: langchain_text_splitters, langchain_community, pydantic
System role: Ingestion pipeline entrypoint
"""

from .entrypoint import IngestionPipeline
from .models import IngestionResult, LoadedSource, UpsertReport

__all__ = [
    "IngestionPipeline",
    "IngestionResult",
    "LoadedSource",
    "UpsertReport",
]
