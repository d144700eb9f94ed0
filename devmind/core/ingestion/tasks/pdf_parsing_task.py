"""
PDF parsing task using LangChain PyPDFLoader.

Converts uploaded PDF bytes into one LangChain Document per page.

Dependencies: langchain_community.document_loaders, pypdf
System role: PDF parsing stage of ingestion
"""

import logging
import tempfile
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader
from langchain_core.documents import Document

from devmind.core.exceptions import UpstreamFailure, ValidationError

logger = logging.getLogger(__name__)


class PdfParsingTask:
    """Parse uploaded PDF bytes into page Documents."""

    def parse(self, content: bytes, filename: str) -> list[Document]:
        """
        Parse a PDF upload.

        Page numbers are 1-based; documents are tagged with the filename
        as their source.

        Args:
            content: Raw PDF bytes
            filename: Original upload filename

        Returns:
            list[Document]: One document per page

        Raises:
            ValidationError: When the upload is empty or not a PDF
            UpstreamFailure: When the PDF cannot be parsed
        """
        if not content:
            raise ValidationError(f"Uploaded file is empty: {filename}", field="file")
        if Path(filename).suffix.lower() != ".pdf":
            raise ValidationError(
                f"Unsupported file format: {filename}. Only PDF files are supported.",
                field="file",
            )

        with tempfile.TemporaryDirectory(prefix="devmind-pdf-") as temp_dir:
            path = Path(temp_dir) / "upload.pdf"
            path.write_bytes(content)
            try:
                pages = PyPDFLoader(str(path)).load()
            except Exception as e:
                raise UpstreamFailure(
                    f"Failed to parse PDF {filename}: {e}", operation="parse"
                ) from e

        documents = [
            Document(
                page_content=page.page_content,
                metadata={
                    "source": filename,
                    "page_number": int(page.metadata.get("page", -1)) + 1,
                },
            )
            for page in pages
        ]
        logger.info(f"{__name__}:parse - Parsed {filename}", extra={"page_count": len(documents)})
        return documents
