"""
Test suite for PdfParsingTask.

System role: Verification of PDF parsing
"""

import io

import pytest
from pypdf import PdfWriter

from devmind.core.exceptions import UpstreamFailure, ValidationError
from devmind.core.ingestion.tasks import PdfParsingTask


@pytest.fixture
def two_page_pdf() -> bytes:
    """Provide a valid two-page PDF."""
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    writer.add_blank_page(width=200, height=200)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class TestPdfParsingTask:
    """Test suite for PdfParsingTask.parse."""

    def test_parse_should_number_pages_from_one(self, two_page_pdf: bytes) -> None:
        """Should return one document per page tagged with filename and 1-based page."""
        documents = PdfParsingTask().parse(two_page_pdf, "slides.pdf")

        assert [d.metadata for d in documents] == [
            {"source": "slides.pdf", "page_number": 1},
            {"source": "slides.pdf", "page_number": 2},
        ]

    def test_parse_should_reject_non_pdf_upload(self) -> None:
        """Should reject files that are not PDFs."""
        with pytest.raises(ValidationError, match="Only PDF files"):
            PdfParsingTask().parse(b"hello", "notes.txt")

    def test_parse_should_reject_empty_upload(self) -> None:
        """Should reject zero-byte uploads."""
        with pytest.raises(ValidationError, match="empty"):
            PdfParsingTask().parse(b"", "empty.pdf")

    def test_parse_should_wrap_corrupt_pdf(self) -> None:
        """Should raise UpstreamFailure for unreadable PDFs."""
        with pytest.raises(UpstreamFailure, match="Failed to parse PDF"):
            PdfParsingTask().parse(b"this is not a pdf", "broken.pdf")
