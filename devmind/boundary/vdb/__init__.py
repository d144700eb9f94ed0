"""
Vector database boundary layer.

Both stores expose `upsert(partition, records)` and
`query(partition, vector, top_k) -> list[VectorMatch]`.
- FAISSVectorsStore: local per-workspace indexes
- S3VectorsStore: production S3 Vectors client
"""

from devmind.boundary.vdb.vector_schemas import VectorMatch, VectorRecord

__all__ = ["VectorMatch", "VectorRecord"]
