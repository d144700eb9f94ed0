"""
Common response models and utilities.

Camel-case wire base model and the uniform error schema.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Error response schema shared by every endpoint."""

    error: str = Field(description="Error message")
