"""
Vector store factory for selecting between FAISS (dev) and S3 Vectors (prod).

Depends on VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: devmind.boundary.vdb, devmind.configs
System role: Vector store instantiation and selection
"""

import logging

from devmind.boundary.vdb.faiss_vectors_store import FAISSVectorsStore
from devmind.boundary.vdb.s3_vectors_store import S3VectorsStore
from devmind.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)


def get_vector_store(settings: VectorStoreSettings):
    """
    Build the vector store selected by configuration.

    Args:
        settings: Vector store settings

    Returns:
        FAISSVectorsStore or S3VectorsStore: Configured vector store instance

    Raises:
        ValueError: If store_type is invalid
    """
    store_type = settings.store_type.lower()

    if store_type == "faiss":
        logger.info(f"{__name__}:get_vector_store - Creating FAISS vector store (local dev mode)")
        return FAISSVectorsStore(persist_directory=settings.faiss_directory)

    if store_type == "s3":
        logger.info(f"{__name__}:get_vector_store - Creating S3 Vectors store (production mode)")
        return S3VectorsStore(
            vectors_bucket=settings.vectors_bucket,
            index_name=settings.index_name,
            region=settings.aws_region,
        )

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
        f"Must be 'faiss' (dev) or 's3' (production)."
    )
