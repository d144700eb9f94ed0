"""
Exception hierarchy for the DevMind workspace backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DevMindException(Exception):
    """Base exception for all DevMind application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(DevMindException):
    """Raised when request input is missing or malformed (HTTP 400)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class UpstreamRateLimited(DevMindException):
    """Raised when the embedding or completion service reports HTTP 429."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize rate-limit error.

        Args:
            message: Upstream error message
            operation: Operation that was throttled (embed, complete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class UpstreamFailure(DevMindException):
    """Raised for any other embedding, completion, clone or vector store failure."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream failure.

        Args:
            message: Upstream error message
            operation: Operation that failed (embed, upsert, query, clone, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class BatchUpsertError(UpstreamFailure):
    """
    Raised when batch k of an ingestion job fails.

    Batches before k stay committed. The job stamp and failed batch index
    allow the caller to resume the job with identical vector ids.
    """

    def __init__(
        self,
        message: str,
        job_stamp: int,
        failed_batch: int,
        total_batches: int,
        committed_ids: list[str],
        cause: Exception | None = None,
    ) -> None:
        """
        Initialize batch upsert error.

        Args:
            message: Error message
            job_stamp: Stamp shared by every vector id of the job
            failed_batch: Zero-based index of the failed batch
            total_batches: Number of batches in the job
            committed_ids: Vector ids already committed by earlier batches
            cause: Original exception raised by the failing batch
        """
        self.job_stamp = job_stamp
        self.failed_batch = failed_batch
        self.total_batches = total_batches
        self.committed_ids = committed_ids
        self.cause = cause
        super().__init__(
            message,
            operation="upsert",
            details={
                "job_stamp": job_stamp,
                "failed_batch": failed_batch,
                "committed_batches": failed_batch,
                "total_batches": total_batches,
            },
        )


class PartialExtractionFailure(DevMindException):
    """A single repository file could not be read. Logged and skipped."""

    def __init__(self, file_path: str, reason: str) -> None:
        """
        Initialize partial extraction failure.

        Args:
            file_path: Path relative to repository root
            reason: Why the file was skipped
        """
        self.file_path = file_path
        super().__init__(f"Skipped {file_path}: {reason}", {"file_path": file_path})
