"""Unit tests for PDF parser module."""

from unittest.mock import patch

import pytest
import pytest_check as check

from src.parsing.pdf_parser import MAX_FILE_SIZE, NO_TEXT_PLACEHOLDER, PDFParseError, parse_pdf
from tests.conftest import build_pdf


class TestParsePdfValid:
    """Tests for successful PDF parsing."""

    def test_extracts_text_and_page_count(self, pdf_bytes: bytes) -> None:
        """Valid PDF returns text content and correct page count."""
        result = parse_pdf(pdf_bytes)

        check.is_in("Information security policy", result.text)
        check.is_in("Access control rules", result.text)
        check.equal(result.pages, 2)

    def test_pages_are_separated_by_blank_line(self, pdf_bytes: bytes) -> None:
        result = parse_pdf(pdf_bytes)

        first, second = result.text.split("\n\n")
        check.is_in("Information security", first)
        check.is_in("Access control", second)

    def test_returns_metadata_fields(self, pdf_bytes: bytes) -> None:
        """Metadata carries page count and info dictionary values."""
        result = parse_pdf(pdf_bytes)

        check.equal(result.metadata["num_pages"], 2)
        check.equal(result.metadata["title"], "Security Handbook")
        check.equal(result.metadata["author"], "IT Team")
        check.equal(result.metadata["subject"], "")
        check.equal(result.metadata["creator"], "")

    def test_blank_pdf_uses_placeholder_text(self, blank_pdf_bytes: bytes) -> None:
        """PDF with no extractable text returns the placeholder."""
        result = parse_pdf(blank_pdf_bytes)

        check.equal(result.pages, 1)
        check.equal(result.text, NO_TEXT_PLACEHOLDER)
        check.equal(result.metadata["title"], "")

    def test_failed_page_is_marked(self) -> None:
        """A page that raises during extraction is replaced by a marker."""
        data = build_pdf(["Only page"])

        with patch("pypdf.PageObject.extract_text", side_effect=RuntimeError("bad font")):
            result = parse_pdf(data)

        check.equal(result.text, "[Page 1: Content extraction failed]")
        check.equal(result.pages, 1)


class TestParsePdfRejection:
    """Tests for PDF validation and rejection."""

    def test_rejects_empty_bytes(self) -> None:
        """Empty bytes raises PDFParseError."""
        with pytest.raises(PDFParseError, match="Empty file"):
            parse_pdf(b"")

    def test_rejects_non_pdf_file(self) -> None:
        """Non-PDF content raises PDFParseError."""
        with pytest.raises(PDFParseError, match="Invalid PDF"):
            parse_pdf(b"<html><body>Not a PDF</body></html>")

    def test_rejects_oversized_file(self) -> None:
        """File over the limit raises PDFParseError."""
        oversized = b"%PDF-1.4" + b"\x00" * (MAX_FILE_SIZE + 1)

        with pytest.raises(PDFParseError, match="exceeds maximum"):
            parse_pdf(oversized)

    def test_respects_custom_size_limit(self, pdf_bytes: bytes) -> None:
        with pytest.raises(PDFParseError, match="exceeds maximum"):
            parse_pdf(pdf_bytes, max_size=100)

    def test_rejects_truncated_pdf(self) -> None:
        """Truncated PDF raises PDFParseError."""
        with pytest.raises(PDFParseError, match="Corrupt|Failed"):
            parse_pdf(b"%PDF-1.4\n1 0 obj\n<<")
