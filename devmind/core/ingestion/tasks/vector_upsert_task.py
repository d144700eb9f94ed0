"""
Vector upsert task.

Embeds chunks in fixed-size batches and writes them to the workspace
partition of the vector store. Batches are processed strictly in order;
each embedding call passes through the shared rate limiter first.

Vector ids are '{workspace}-{jobStamp}-{sequence}' with the stamp fixed per
job and the sequence global across batches, so a job resumed from a failed
batch with the same stamp rewrites identical ids.

Dependencies: fastapi.concurrency, devmind.boundary.vdb, devmind.core.embedding_cache
System role: Embedding and vector write stage of ingestion
"""

import logging
import time
from collections.abc import Callable

from fastapi.concurrency import run_in_threadpool

from devmind.boundary.vdb.vector_schemas import VectorRecord
from devmind.core.embedding_cache import EmbeddingCache
from devmind.core.exceptions import BatchUpsertError, UpstreamFailure, ValidationError
from devmind.core.ingestion.models import UpsertReport
from devmind.core.ingestion.policy import UPSERT_BATCH_SIZE
from devmind.models.chunk import Chunk

logger = logging.getLogger(__name__)


def make_vector_id(workspace_id: str, job_stamp: int, sequence: int) -> str:
    return f"{workspace_id}-{job_stamp}-{sequence}"


class VectorUpsertTask:
    """Embed and upsert chunks batch by batch."""

    def __init__(
        self,
        embedder,
        vector_store,
        cache: EmbeddingCache,
        expected_dimension: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize upsert task.

        Args:
            embedder: Client exposing async embed_batch(texts)
            vector_store: Store exposing upsert(partition, records)
            cache: Shared cache whose limiter spaces embedding calls
            expected_dimension: Vector length every embedding must have
            clock: Wall clock in seconds, used for job stamps
        """
        self._embedder = embedder
        self._vector_store = vector_store
        self._cache = cache
        self._expected_dimension = expected_dimension
        self._clock = clock

    async def upsert(
        self,
        chunks: list[Chunk],
        workspace_id: str,
        job_stamp: int | None = None,
        start_batch: int = 0,
    ) -> UpsertReport:
        """
        Embed and upsert chunks in batches of UPSERT_BATCH_SIZE.

        Args:
            chunks: Chunks of one ingestion job, in source order
            workspace_id: Target partition
            job_stamp: Stamp of a job being resumed (new stamp if None)
            start_batch: First batch to process when resuming

        Returns:
            UpsertReport: Job stamp, batch count and committed vector ids

        Raises:
            ValidationError: A chunk belongs to another workspace
            BatchUpsertError: A batch failed; earlier batches stay committed
        """
        foreign = [c for c in chunks if c.workspace_id != workspace_id]
        if foreign:
            raise ValidationError(
                f"{len(foreign)} chunks do not belong to workspace {workspace_id}",
                field="workspaceId",
            )

        stamp = job_stamp if job_stamp is not None else int(self._clock() * 1000)
        batches = [
            chunks[offset:offset + UPSERT_BATCH_SIZE]
            for offset in range(0, len(chunks), UPSERT_BATCH_SIZE)
        ]
        committed_ids: list[str] = []

        for batch_index in range(start_batch, len(batches)):
            batch = batches[batch_index]
            try:
                records = await self._embed_batch(batch, workspace_id, stamp, batch_index)
                await run_in_threadpool(self._vector_store.upsert, workspace_id, records)
            except Exception as e:
                reason = getattr(e, "message", str(e))
                logger.error(
                    f"{__name__}:upsert - Batch {batch_index + 1}/{len(batches)} failed: {reason}",
                    extra={"workspace_id": workspace_id, "job_stamp": stamp},
                )
                raise BatchUpsertError(
                    f"Batch {batch_index + 1}/{len(batches)} failed: {reason}",
                    job_stamp=stamp,
                    failed_batch=batch_index,
                    total_batches=len(batches),
                    committed_ids=committed_ids,
                    cause=e,
                ) from e

            committed_ids.extend(record.id for record in records)
            logger.info(
                f"{__name__}:upsert - Upserted batch {batch_index + 1}/{len(batches)}",
                extra={"workspace_id": workspace_id, "vectors": len(records)},
            )

        return UpsertReport(job_stamp=stamp, batch_count=len(batches), vector_ids=committed_ids)

    async def _embed_batch(
        self, batch: list[Chunk], workspace_id: str, job_stamp: int, batch_index: int
    ) -> list[VectorRecord]:
        await self._cache.throttle()
        vectors = await self._embedder.embed_batch([chunk.text for chunk in batch])

        if not vectors or len(vectors) != len(batch):
            raise UpstreamFailure(
                "Embedding API returned empty/invalid vectors.",
                operation="embed_batch",
                details={"expected": len(batch), "received": len(vectors or [])},
            )
        for vector in vectors:
            if len(vector) != self._expected_dimension:
                raise UpstreamFailure(
                    f"Embedding API returned a {len(vector)}-dimension vector, "
                    f"expected {self._expected_dimension}",
                    operation="embed_batch",
                )

        first_sequence = batch_index * UPSERT_BATCH_SIZE
        return [
            VectorRecord(
                id=make_vector_id(workspace_id, job_stamp, first_sequence + position),
                values=vector,
                metadata=chunk.to_metadata(),
            )
            for position, (chunk, vector) in enumerate(zip(batch, vectors))
        ]
