"""
Core business logic module.

Contains the ingestion pipeline, embedding cache, retrieval, citation
resolution and the exception hierarchy.
"""

from devmind.core.exceptions import (
    BatchUpsertError,
    DevMindException,
    PartialExtractionFailure,
    UpstreamFailure,
    UpstreamRateLimited,
    ValidationError,
)

__all__ = [
    "DevMindException",
    "ValidationError",
    "UpstreamRateLimited",
    "UpstreamFailure",
    "BatchUpsertError",
    "PartialExtractionFailure",
]
