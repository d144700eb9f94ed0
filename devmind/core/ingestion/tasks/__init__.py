"""
Task modules for the ingestion pipeline.

Exports: PdfParsingTask, TextChunkingTask, RepositoryLoaderTask, VectorUpsertTask
"""

from .pdf_parsing_task import PdfParsingTask
from .repository_loader_task import RepositoryLoaderTask, parse_repository_url
from .text_chunking_task import TextChunkingTask
from .vector_upsert_task import VectorUpsertTask

__all__ = [
    "PdfParsingTask",
    "TextChunkingTask",
    "RepositoryLoaderTask",
    "parse_repository_url",
    "VectorUpsertTask",
]
