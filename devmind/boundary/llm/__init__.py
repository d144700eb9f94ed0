"""
Model boundary layer.

Gemini embedding and completion clients plus upstream error classification.
"""

from devmind.boundary.llm.errors import classify_upstream_error, is_rate_limited

__all__ = ["classify_upstream_error", "is_rate_limited"]
