"""
Vector store configuration settings.

Manages the local FAISS store (development) and S3 Vectors (production).

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for ingestion and retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (FAISS for dev, S3 Vectors for prod)."""

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="faiss",
        description="Vector store type: 'faiss' for local dev, 's3' for production",
    )
    faiss_directory: str = Field(
        default=".faiss_workspaces",
        description="Directory holding one persisted FAISS index per workspace",
    )
    vectors_bucket: str = Field(
        default="devmind-dev-vectors",
        description="S3 Vectors bucket name",
    )
    index_name: str = Field(default="workspace-chunks", description="S3 Vectors index name")
    aws_region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")
