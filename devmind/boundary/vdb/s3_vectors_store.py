"""
S3 Vectors store for production.

Stores every workspace in one S3 Vectors index and partitions by the
`workspaceId` metadata key on every query. The index must declare `text`
as a non-filterable metadata key.

Dependencies: boto3, botocore, tenacity
System role: Production vector store (S3 Vectors)
"""

import logging

import boto3
from botocore.exceptions import ClientError
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from devmind.boundary.vdb.vector_schemas import VectorMatch, VectorRecord
from devmind.core.exceptions import UpstreamFailure
from devmind.models.chunk import ChunkMetadata

logger = logging.getLogger(__name__)

THROTTLING_CODES = {"ThrottlingException", "TooManyRequestsException", "ServiceUnavailableException"}


def _is_throttling(exc: BaseException) -> bool:
    return isinstance(exc, ClientError) and exc.response.get("Error", {}).get("Code") in THROTTLING_CODES


_retry_on_throttling = retry(
    retry=retry_if_exception(_is_throttling),
    stop=stop_after_attempt(5),
    wait=wait_exponential_jitter(initial=1, max=30, jitter=5),
    before_sleep=lambda retry_state: logger.warning(
        f"{__name__} - Retry {retry_state.attempt_number}/5 after throttling"
    ),
    reraise=True,
)


class S3VectorsStore:
    """S3 Vectors client exposing the upsert/query partition contract."""

    def __init__(
        self,
        vectors_bucket: str,
        index_name: str,
        region: str = "us-east-1",
        client=None,
    ) -> None:
        """
        Initialize S3 Vectors store.

        Args:
            vectors_bucket: S3 Vectors bucket name
            index_name: Index name within the bucket
            region: AWS region for S3 Vectors
            client: Optional preconfigured boto3 s3vectors client
        """
        self._vectors_bucket = vectors_bucket
        self._index_name = index_name
        self._client = client or boto3.client("s3vectors", region_name=region)

    @_retry_on_throttling
    def _put_vectors(self, vectors: list[dict]) -> None:
        self._client.put_vectors(
            vectorBucketName=self._vectors_bucket,
            indexName=self._index_name,
            vectors=vectors,
        )

    @_retry_on_throttling
    def _query_vectors(self, vector: list[float], top_k: int, partition: str) -> dict:
        return self._client.query_vectors(
            vectorBucketName=self._vectors_bucket,
            indexName=self._index_name,
            topK=top_k,
            queryVector={"float32": vector},
            filter={"workspaceId": partition},
            returnMetadata=True,
            returnDistance=True,
        )

    def upsert(self, partition: str, records: list[VectorRecord]) -> None:
        """
        Upsert vectors of one workspace.

        Raises:
            UpstreamFailure: If S3 Vectors rejects the batch
        """
        if not records:
            return

        vectors = []
        for record in records:
            metadata = record.metadata.to_store_dict()
            metadata["workspaceId"] = partition
            vectors.append({"key": record.id, "data": {"float32": record.values}, "metadata": metadata})

        try:
            self._put_vectors(vectors)
        except ClientError as e:
            raise UpstreamFailure(
                f"Failed to upsert vectors to S3 Vectors: {e}",
                operation="upsert",
                details={"vector_count": len(records)},
            ) from e

        logger.info(
            f"{__name__}:upsert - Upserted {len(records)} vectors",
            extra={"workspace_id": partition, "index": self._index_name},
        )

    def query(self, partition: str, vector: list[float], top_k: int) -> list[VectorMatch]:
        """
        Return the top_k nearest vectors of one workspace, most similar first.

        Raises:
            UpstreamFailure: If the query fails
        """
        try:
            response = self._query_vectors(vector, top_k, partition)
        except ClientError as e:
            raise UpstreamFailure(
                f"Failed to query vectors from S3 Vectors: {e}", operation="query"
            ) from e

        return [
            VectorMatch(
                id=item["key"],
                score=1.0 - float(item.get("distance", 0.0)),
                metadata=ChunkMetadata.model_validate(item.get("metadata", {})),
            )
            for item in response.get("vectors", [])
        ]
