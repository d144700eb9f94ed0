"""
Upstream error classification.

Maps exceptions raised by model SDKs to the application taxonomy so the
HTTP boundary can answer 429 for throttling and 500 for anything else.

Dependencies: devmind.core.exceptions
System role: Error translation for external model calls
"""

from devmind.core.exceptions import DevMindException, UpstreamFailure, UpstreamRateLimited

RATE_LIMIT_MARKERS = ("429", "resource_exhausted", "resource exhausted", "rate limit", "too many requests")


def _status_of(exc: BaseException) -> object | None:
    for attr in ("status_code", "code", "status"):
        value = getattr(exc, attr, None)
        if value is not None:
            return value
    response = getattr(exc, "response", None)
    return getattr(response, "status_code", None)


def is_rate_limited(exc: BaseException) -> bool:
    """
    Whether an exception (or any exception in its cause chain) is an HTTP 429.

    Args:
        exc: Exception raised by an SDK call

    Returns:
        bool: True when the upstream service reported throttling
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        status = _status_of(current)
        if status == 429 or str(status) == "429":
            return True
        message = str(current).lower()
        if any(marker in message for marker in RATE_LIMIT_MARKERS):
            return True
        current = current.__cause__ or current.__context__
    return False


def classify_upstream_error(exc: Exception, operation: str) -> DevMindException:
    """
    Translate an SDK exception into UpstreamRateLimited or UpstreamFailure.

    Args:
        exc: Exception raised by the upstream call
        operation: Name of the failed operation (embed, embed_batch, complete)

    Returns:
        DevMindException: Application exception to raise from the original
    """
    if isinstance(exc, DevMindException):
        return exc
    if is_rate_limited(exc):
        return UpstreamRateLimited(str(exc), operation=operation)
    return UpstreamFailure(str(exc) or type(exc).__name__, operation=operation)
