"""Document parsing: URL inspection and byte-level text extraction.

Responsibilities:
    - Document type and file name detection from a URL
    - PDF text and metadata extraction with pypdf
    - Word text extraction with python-docx
    - Plain text decoding

Nothing in this package performs network I/O; fetching lives in
``src.documents``.
"""

from src.parsing.document_type import (
    get_document_type,
    get_file_name,
    get_google_doc_id,
    google_doc_export_url,
)
from src.parsing.errors import DocumentParseError
from src.parsing.pdf_parser import PDFContent, PDFParseError, parse_pdf
from src.parsing.text_parser import parse_text
from src.parsing.word_parser import WordParseError, parse_word

__all__ = [
    "DocumentParseError",
    "PDFContent",
    "PDFParseError",
    "WordParseError",
    "get_document_type",
    "get_file_name",
    "get_google_doc_id",
    "google_doc_export_url",
    "parse_pdf",
    "parse_text",
    "parse_word",
]
