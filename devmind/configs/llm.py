"""
Completion model configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Chat/insight model configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Google Gemini chat model configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    chat_model: str = Field(
        default="gemini-2.5-flash",
        description="Model answering workspace questions",
    )
    insight_model: str = Field(
        default="gemini-2.0-flash",
        description="Model producing overview and mind map JSON",
    )
    temperature: float = Field(
        default=0.3,
        description="Sampling temperature for question answering",
        ge=0.0,
        le=2.0,
    )
    max_retries: int = Field(
        default=2,
        description="Retries performed by the client library itself",
        ge=0,
    )
