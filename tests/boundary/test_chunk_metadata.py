"""
Test suite for chunk and vector metadata models.

System role: Verification of stored metadata shape
"""

import pytest
from pydantic import ValidationError as SchemaValidationError

from devmind.models.chunk import Chunk, ChunkMetadata, SourceType


class TestChunkMetadata:
    """Test suite for ChunkMetadata.to_store_dict."""

    def test_store_dict_should_omit_absent_code_fields(self, pdf_metadata: ChunkMetadata) -> None:
        """Should drop every optional field that is None."""
        stored = pdf_metadata.to_store_dict()

        assert set(stored) == {"text", "source", "sourceType", "page", "workspaceId"}
        assert None not in stored.values()

    def test_store_dict_should_keep_code_fields(self, code_metadata: ChunkMetadata) -> None:
        """Should use camelCase keys for repository fields."""
        stored = code_metadata.to_store_dict()

        assert stored["filePath"] == "src/train.py"
        assert (stored["lineStart"], stored["lineEnd"]) == (101, 200)
        assert stored["repoUrl"] == "acme/trainer"
        assert stored["sourceType"] == "github"

    def test_metadata_should_parse_stored_dict(self, code_metadata: ChunkMetadata) -> None:
        """Should rebuild metadata from the stored camelCase record."""
        assert ChunkMetadata.model_validate(code_metadata.to_store_dict()) == code_metadata


class TestChunk:
    """Test suite for Chunk validation."""

    def test_chunk_should_require_code_fields_for_github(self) -> None:
        """Should reject code chunks without a line range."""
        with pytest.raises(SchemaValidationError):
            Chunk(
                text="x",
                source_type=SourceType.GITHUB,
                source_label="acme/widgets",
                workspace_id="ws-1",
                file_path="a.py",
            )

    def test_chunk_should_reject_inverted_line_range(self) -> None:
        """Should reject line_end before line_start."""
        with pytest.raises(SchemaValidationError):
            Chunk(
                text="x",
                source_type=SourceType.GITHUB,
                source_label="acme/widgets",
                workspace_id="ws-1",
                file_path="a.py",
                line_start=10,
                line_end=5,
                repo_label="acme/widgets",
            )

    def test_chunk_should_reject_code_fields_on_documents(self) -> None:
        """Should keep document chunks free of repository fields."""
        with pytest.raises(SchemaValidationError):
            Chunk(
                text="x",
                source_type=SourceType.PDF,
                source_label="notes.pdf",
                workspace_id="ws-1",
                line_start=1,
            )
