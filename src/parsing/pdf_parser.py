"""PDF parsing module using pypdf.

Extracts page text and document metadata from PDF bytes fetched from a URL.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from src.parsing.errors import DocumentParseError

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 25 * 1024 * 1024  # 25MB
PDF_MAGIC_BYTES = b"%PDF"
NO_TEXT_PLACEHOLDER = "No text content found in PDF"

_METADATA_FIELDS = {
    "title": "/Title",
    "author": "/Author",
    "subject": "/Subject",
    "creator": "/Creator",
}


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Page texts separated by blank lines.
        pages: Total number of pages in the document.
        metadata: ``num_pages`` plus title, author, subject and creator
            (empty strings when the PDF does not set them).
    """

    text: str
    pages: int = Field(ge=0)
    metadata: dict[str, str | int]


class PDFParseError(DocumentParseError):
    """Raised when PDF parsing fails."""

    pass


def _validate_pdf_bytes(file_content: bytes, max_size: int) -> None:
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > max_size:
        size_mb = len(file_content) / (1024 * 1024)
        limit_mb = max_size / (1024 * 1024)
        raise PDFParseError(
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:.0f}MB)"
        )

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def _extract_metadata(reader: PdfReader) -> dict[str, str | int]:
    """Read the document info dictionary.

    Failures are logged and leave the remaining fields empty.
    """
    metadata: dict[str, str | int] = {
        "num_pages": len(reader.pages),
        **{key: "" for key in _METADATA_FIELDS},
    }

    try:
        info = reader.metadata
        if info:
            for key, pdf_key in _METADATA_FIELDS.items():
                value = info.get(pdf_key)
                if value:
                    metadata[key] = str(value)
    except Exception as e:
        logger.warning(f"Could not extract PDF metadata: {e}")

    return metadata


def parse_pdf(file_content: bytes, max_size: int = MAX_FILE_SIZE) -> PDFContent:
    """Parse a PDF file and extract its text content.

    A page whose text cannot be extracted is replaced by a marker so page
    boundaries in the output still line up with the document.

    Args:
        file_content: Raw bytes of the PDF file.
        max_size: Largest accepted input in bytes.

    Returns:
        PDFContent with extracted text, page count, and metadata.

    Raises:
        PDFParseError: If the file is invalid, too large, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content, max_size)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    text_parts: list[str] = []
    for i, page in enumerate(reader.pages, start=1):
        try:
            page_text = page.extract_text()
        except Exception as e:
            logger.warning(f"Error extracting text from page {i}: {e}")
            text_parts.append(f"[Page {i}: Content extraction failed]")
            continue
        if page_text and page_text.strip():
            text_parts.append(page_text.strip())

    text = "\n\n".join(text_parts).strip()
    if not text:
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")
        text = NO_TEXT_PLACEHOLDER

    return PDFContent(
        text=text,
        pages=pages,
        metadata=_extract_metadata(reader),
    )
