"""
Test suite for upstream error classification.

System role: Verification of SDK error translation
"""

from devmind.boundary.llm.errors import classify_upstream_error, is_rate_limited
from devmind.core.exceptions import UpstreamFailure, UpstreamRateLimited, ValidationError


class StatusError(Exception):
    """SDK-style error carrying an HTTP status code."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class TestIsRateLimited:
    """Test suite for is_rate_limited."""

    def test_should_detect_status_code(self) -> None:
        """Should flag errors carrying status 429."""
        assert is_rate_limited(StatusError("slow down", 429))

    def test_should_detect_resource_exhausted_message(self) -> None:
        """Should flag quota messages without a status attribute."""
        assert is_rate_limited(RuntimeError("429 RESOURCE_EXHAUSTED: quota exceeded"))

    def test_should_follow_cause_chain(self) -> None:
        """Should flag wrapped throttling errors."""
        try:
            try:
                raise StatusError("throttled", 429)
            except StatusError as inner:
                raise RuntimeError("embedding failed") from inner
        except RuntimeError as outer:
            assert is_rate_limited(outer)

    def test_should_not_flag_other_errors(self) -> None:
        """Should not flag server errors."""
        assert not is_rate_limited(StatusError("boom", 500))


class TestClassifyUpstreamError:
    """Test suite for classify_upstream_error."""

    def test_should_map_throttling_to_rate_limited(self) -> None:
        """Should return UpstreamRateLimited tagged with the operation."""
        error = classify_upstream_error(StatusError("slow down", 429), operation="embed")

        assert isinstance(error, UpstreamRateLimited)
        assert error.details["operation"] == "embed"

    def test_should_map_other_errors_to_failure(self) -> None:
        """Should return UpstreamFailure for anything else."""
        error = classify_upstream_error(ValueError("bad request"), operation="complete")

        assert isinstance(error, UpstreamFailure)
        assert error.message == "bad request"

    def test_should_pass_application_errors_through(self) -> None:
        """Should not re-wrap application exceptions."""
        original = ValidationError("bad")

        assert classify_upstream_error(original, operation="embed") is original
