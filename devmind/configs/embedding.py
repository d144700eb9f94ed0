"""
Embedding model configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Embedding client configuration for ingestion and retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """Google Gemini embedding configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str = Field(
        default="",
        description="Google API key (falls back to GOOGLE_API_KEY in the environment)",
    )
    model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    dimension: int = Field(
        default=768,
        description="Fixed output dimension expected for every stored vector",
    )
