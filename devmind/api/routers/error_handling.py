"""
API error handling utilities.

Provides a decorator for consistent error handling across endpoints: the
exception taxonomy is mapped to `{"error": <message>}` JSON bodies with
status 400, 429 or 500.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse

from devmind.core.exceptions import (
    BatchUpsertError,
    DevMindException,
    UpstreamRateLimited,
    ValidationError,
)
from devmind.observability.log_utils import log_exception_with_context, safe_log_value

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

RATE_LIMITED_MESSAGE = "Server is busy (rate limit exceeded). Please try again in a few seconds."
INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def handle_api_errors(func: F) -> F:
    """
    Decorator mapping domain errors to JSON error responses.

    This centralizes:
    - Logging of errors with their details
    - Mapping exceptions to HTTP status codes
    - The `{"error": ...}` response shape
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except ValidationError as e:
            logger.warning(
                f"{__name__}:{func.__name__} - Invalid request: {e.message}",
                extra={"details": e.details},
            )
            return error_response(status.HTTP_400_BAD_REQUEST, e.message)

        except UpstreamRateLimited as e:
            logger.warning(
                f"{__name__}:{func.__name__} - Upstream rate limited",
                extra={"details": e.details, "error": safe_log_value(e.message)},
            )
            return error_response(status.HTTP_429_TOO_MANY_REQUESTS, RATE_LIMITED_MESSAGE)

        except BatchUpsertError as e:
            if isinstance(e.cause, UpstreamRateLimited):
                logger.warning(
                    f"{__name__}:{func.__name__} - Upstream rate limited during batch upsert",
                    extra={"details": e.details, "error": safe_log_value(e.message)},
                )
                return error_response(status.HTTP_429_TOO_MANY_REQUESTS, RATE_LIMITED_MESSAGE)
            logger.error(
                f"{__name__}:{func.__name__} - Batch upsert failed: {e}",
                extra={"details": e.details},
            )
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message)

        except DevMindException as e:
            logger.error(
                f"{__name__}:{func.__name__} - Upstream failure: {e}",
                extra={"details": e.details},
            )
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message)

        except Exception as e:
            log_exception_with_context(
                logger, f"{__name__}:{func.__name__} - Unexpected error", e, endpoint=func.__name__
            )
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    return wrapper  # type: ignore
