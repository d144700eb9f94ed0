"""
Test suite for S3VectorsStore.

Uses a mocked boto3 s3vectors client.

System role: Verification of the production vector store adapter
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from devmind.boundary.vdb.s3_vectors_store import S3VectorsStore
from devmind.boundary.vdb.vector_schemas import VectorRecord
from devmind.core.exceptions import UpstreamFailure


@pytest.fixture
def mock_client() -> MagicMock:
    """Provide mock s3vectors client."""
    return MagicMock()


@pytest.fixture
def store(mock_client: MagicMock) -> S3VectorsStore:
    """Provide store bound to the mock client."""
    return S3VectorsStore(vectors_bucket="bucket", index_name="chunks", client=mock_client)


class TestS3VectorsStore:
    """Test suite for S3VectorsStore upsert/query."""

    def test_upsert_should_send_keys_vectors_and_partition(self, store, mock_client, pdf_metadata) -> None:
        """Should tag every vector with its workspace and omit absent fields."""
        store.upsert("ws-1", [VectorRecord(id="ws-1-5-0", values=[0.5, 0.5], metadata=pdf_metadata)])

        vectors = mock_client.put_vectors.call_args.kwargs["vectors"]
        assert vectors[0]["key"] == "ws-1-5-0"
        assert vectors[0]["data"] == {"float32": [0.5, 0.5]}
        assert vectors[0]["metadata"]["workspaceId"] == "ws-1"
        assert "filePath" not in vectors[0]["metadata"]

    def test_upsert_should_skip_empty_batches(self, store, mock_client) -> None:
        """Should not call the service for no records."""
        store.upsert("ws-1", [])

        mock_client.put_vectors.assert_not_called()

    def test_query_should_filter_by_workspace(self, store, mock_client, pdf_metadata) -> None:
        """Should restrict the query to the partition and map matches."""
        mock_client.query_vectors.return_value = {
            "vectors": [
                {"key": "ws-1-5-0", "distance": 0.25, "metadata": pdf_metadata.to_store_dict()},
            ]
        }

        matches = store.query("ws-1", [0.5, 0.5], top_k=7)

        kwargs = mock_client.query_vectors.call_args.kwargs
        assert kwargs["filter"] == {"workspaceId": "ws-1"}
        assert kwargs["topK"] == 7
        assert matches[0].score == pytest.approx(0.75)
        assert matches[0].metadata == pdf_metadata

    def test_query_should_wrap_client_errors(self, store, mock_client) -> None:
        """Should raise UpstreamFailure for service errors."""
        mock_client.query_vectors.side_effect = ClientError(
            {"Error": {"Code": "ValidationException", "Message": "bad vector"}}, "QueryVectors"
        )

        with pytest.raises(UpstreamFailure):
            store.query("ws-1", [0.5], top_k=7)
