"""
Defensive JSON extraction from completion output.

Models often wrap JSON in markdown fences or surround it with prose. The
parser tries the fenced body, the raw text, then the outermost braces, and
validates the first object found against a pydantic schema.

Dependencies: json, pydantic
System role: Structured output parsing for workspace insights
"""

import json
import logging
import re
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

logger = logging.getLogger(__name__)

FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)

ModelT = TypeVar("ModelT", bound=BaseModel)


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Return the first JSON object found in text, or None."""
    candidates = [m.group(1) for m in FENCED_BLOCK_PATTERN.finditer(text)]
    candidates.append(text)
    start, end = text.find("{"), text.rfind("}")
    if 0 <= start < end:
        candidates.append(text[start:end + 1])

    for candidate in candidates:
        try:
            payload = json.loads(candidate.strip())
        except json.JSONDecodeError:
            continue
        if isinstance(payload, dict):
            return payload
    return None


def parse_model_output(
    text: str,
    schema: type[ModelT],
    fallback: Callable[[str], ModelT],
) -> ModelT:
    """
    Parse completion output into a schema instance.

    Args:
        text: Raw completion text
        schema: Pydantic model to validate against
        fallback: Builds a result from the raw text when parsing fails

    Returns:
        ModelT: Validated instance, or the fallback result
    """
    payload = extract_json_object(text)
    if payload is None:
        logger.warning(f"{__name__}:parse_model_output - No JSON object in output, using fallback")
        return fallback(text)

    try:
        return schema.model_validate(payload)
    except SchemaValidationError as e:
        logger.warning(
            f"{__name__}:parse_model_output - Output failed {schema.__name__} validation",
            extra={"error_count": e.error_count()},
        )
        return fallback(text)
