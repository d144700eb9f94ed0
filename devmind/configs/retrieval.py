"""
Retrieval policy settings.

Top-K differs per call site: question answering uses a wider window than
the quick structural summaries.

Dependencies: pydantic, pydantic_settings
System role: Per call-site retrieval policy
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Top-K policy for each retrieval call site."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIEVAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    chat_top_k: int = Field(default=7, ge=1, le=100)
    overview_top_k: int = Field(default=20, ge=1, le=100)
    mindmap_top_k: int = Field(default=30, ge=1, le=100)
