"""
FAISS vector store for local development.

Keeps one FAISS index per workspace partition, persisted to disk under a
hashed directory name. Vectors are precomputed by the ingestion pipeline,
so the store never calls an embedding model itself.

Dependencies: faiss-cpu, langchain_community.vectorstores, devmind.boundary.vdb.vector_schemas
System role: Local vector store for development and tests
"""

import hashlib
import logging
import threading
from pathlib import Path

from langchain_community.vectorstores import FAISS
from langchain_core.embeddings import Embeddings

from devmind.boundary.vdb.vector_schemas import VectorMatch, VectorRecord
from devmind.core.exceptions import UpstreamFailure
from devmind.models.chunk import ChunkMetadata

logger = logging.getLogger(__name__)


class PrecomputedEmbeddings(Embeddings):
    """Embeddings placeholder for indexes fed exclusively with precomputed vectors."""

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        raise NotImplementedError("Partition indexes only accept precomputed vectors")

    def embed_query(self, text: str) -> list[float]:
        raise NotImplementedError("Partition indexes are queried by vector")


class FAISSVectorsStore:
    """
    FAISS vector store partitioned by workspace.

    Upserting an id that already exists in the partition replaces it.
    Writes to a partition are serialized by a process-local lock.
    """

    def __init__(self, persist_directory: str = ".faiss_workspaces") -> None:
        """
        Initialize the store.

        Args:
            persist_directory: Root directory for per-workspace indexes
        """
        self._root = Path(persist_directory)
        self._root.mkdir(parents=True, exist_ok=True)
        self._embeddings = PrecomputedEmbeddings()
        self._partitions: dict[str, FAISS] = {}
        self._lock = threading.Lock()

    def _partition_dir(self, partition: str) -> Path:
        digest = hashlib.sha256(partition.encode("utf-8")).hexdigest()[:32]
        return self._root / digest

    def _load_partition(self, partition: str) -> FAISS | None:
        if partition in self._partitions:
            return self._partitions[partition]

        path = self._partition_dir(partition)
        if not (path / "index.faiss").exists():
            return None

        logger.info(f"{__name__}:_load_partition - Loading index from {path}")
        index = FAISS.load_local(
            str(path),
            self._embeddings,
            allow_dangerous_deserialization=True,
        )
        self._partitions[partition] = index
        return index

    def upsert(self, partition: str, records: list[VectorRecord]) -> None:
        """
        Upsert vectors into a workspace partition.

        Args:
            partition: Workspace id
            records: Vectors with ids and metadata

        Raises:
            UpstreamFailure: If the index cannot be written
        """
        if not records:
            return

        text_embeddings = [(r.metadata.text, r.values) for r in records]
        metadatas = [{**r.metadata.to_store_dict(), "vectorId": r.id} for r in records]
        ids = [r.id for r in records]

        with self._lock:
            try:
                index = self._load_partition(partition)
                if index is None:
                    index = FAISS.from_embeddings(
                        text_embeddings,
                        self._embeddings,
                        metadatas=metadatas,
                        ids=ids,
                    )
                    self._partitions[partition] = index
                else:
                    existing = set(index.index_to_docstore_id.values())
                    replaced = [vector_id for vector_id in ids if vector_id in existing]
                    if replaced:
                        index.delete(replaced)
                    index.add_embeddings(text_embeddings, metadatas=metadatas, ids=ids)

                index.save_local(str(self._partition_dir(partition)))
            except Exception as e:
                raise UpstreamFailure(
                    f"Failed to upsert vectors: {e}",
                    operation="upsert",
                    details={"vector_count": len(records)},
                ) from e

        logger.info(
            f"{__name__}:upsert - Upserted {len(records)} vectors",
            extra={"workspace_id": partition, "vector_count": len(records)},
        )

    def query(self, partition: str, vector: list[float], top_k: int) -> list[VectorMatch]:
        """
        Return the top_k nearest vectors of a partition, most similar first.

        Args:
            partition: Workspace id
            vector: Query embedding
            top_k: Number of neighbours

        Returns:
            list[VectorMatch]: Matches with metadata (empty for unknown partitions)

        Raises:
            UpstreamFailure: If the index cannot be searched
        """
        with self._lock:
            try:
                index = self._load_partition(partition)
                if index is None:
                    return []
                results = index.similarity_search_with_score_by_vector(vector, k=top_k)
            except Exception as e:
                raise UpstreamFailure(
                    f"Failed to query vectors: {e}", operation="query"
                ) from e

        matches = []
        for doc, distance in results:
            matches.append(
                VectorMatch(
                    id=str(doc.metadata.get("vectorId", "")),
                    score=1.0 / (1.0 + float(distance)),
                    metadata=ChunkMetadata.model_validate(doc.metadata),
                )
            )
        return matches
