"""
Observability module.

Provides logging configuration and safe structured-logging helpers.
"""

from devmind.observability.log_utils import safe_log_value
from devmind.observability.logger import configure_logging

__all__ = ["configure_logging", "safe_log_value"]
