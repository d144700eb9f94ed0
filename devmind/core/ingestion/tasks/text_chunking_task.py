"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits documents into 1000-character chunks with 200-character overlap,
preferring paragraph, line and word boundaries before hard cuts.

Dependencies: langchain_text_splitters
System role: Document/text chunking stage of ingestion
"""

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

from devmind.core.ingestion.policy import TEXT_CHUNK_OVERLAP, TEXT_CHUNK_SIZE
from devmind.models.chunk import Chunk, SourceType


class TextChunkingTask:
    """Split documents into overlapping character chunks."""

    def __init__(self) -> None:
        """Initialize splitter with the fixed chunking policy."""
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=TEXT_CHUNK_SIZE,
            chunk_overlap=TEXT_CHUNK_OVERLAP,
            add_start_index=True,
            length_function=len,
        )

    def split_documents(self, documents: list[Document]) -> list[Document]:
        """
        Split each document independently.

        Overlap never crosses a document boundary. Pieces keep the parent
        metadata plus `start_index`.

        Args:
            documents: LangChain Documents to split

        Returns:
            list[Document]: Pieces in source order
        """
        pieces: list[Document] = []
        for document in documents:
            pieces.extend(self._splitter.split_documents([document]))
        return pieces

    def chunk(
        self,
        documents: list[Document],
        workspace_id: str,
        source_type: SourceType,
    ) -> list[Chunk]:
        """
        Split documents into workspace chunks.

        Each document must carry `source` in its metadata and may carry
        `page_number`.

        Args:
            documents: Documents of one ingestion job, in order
            workspace_id: Owning workspace
            source_type: pdf or text

        Returns:
            list[Chunk]: Chunks in source order
        """
        return [
            Chunk(
                text=piece.page_content,
                source_type=source_type,
                source_label=piece.metadata["source"],
                workspace_id=workspace_id,
                page_number=piece.metadata.get("page_number", 0),
            )
            for piece in self.split_documents(documents)
        ]
