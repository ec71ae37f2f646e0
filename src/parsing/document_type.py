"""URL inspection: document type, file name and Google Docs ids.

Detection is purely lexical. Nothing here touches the network.
"""

import re
from urllib.parse import unquote, urlparse

from src.models.schemas import DocumentType
from src.parsing.errors import DocumentParseError

DEFAULT_FILE_NAME = "document"

_GOOGLE_DOC_ID = re.compile(r"docs\.google\.com/document/d/([^/?#]+)")

_EXTENSION_TYPES: dict[str, DocumentType] = {
    "pdf": DocumentType.PDF,
    "doc": DocumentType.WORD,
    "docx": DocumentType.WORD,
    "xls": DocumentType.EXCEL,
    "xlsx": DocumentType.EXCEL,
    "txt": DocumentType.TEXT,
}


def get_document_type(url: str) -> DocumentType:
    """Detect the document type from its URL.

    Google Docs and Sheets are recognised by host and path. Everything else
    goes by file extension; unknown extensions are treated as PDF.
    """
    if "docs.google.com/document" in url:
        return DocumentType.GOOGLE_DOC
    if "docs.google.com/spreadsheets" in url:
        return DocumentType.GOOGLE_SHEET

    try:
        path = urlparse(url).path or url
    except ValueError:
        path = url.split("?", 1)[0].split("#", 1)[0]
    extension = path.rsplit(".", 1)[-1].lower() if "." in path else ""
    return _EXTENSION_TYPES.get(extension, DocumentType.PDF)


def get_file_name(url: str) -> str:
    """Return the decoded last path segment of ``url``."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return DEFAULT_FILE_NAME

    if not parsed.scheme or not parsed.netloc:
        return DEFAULT_FILE_NAME

    segment = parsed.path.rstrip("/").rsplit("/", 1)[-1]
    return unquote(segment) or DEFAULT_FILE_NAME


def get_google_doc_id(url: str) -> str:
    """Extract the document id from a Google Docs URL.

    Raises:
        DocumentParseError: If the URL carries no document id.
    """
    match = _GOOGLE_DOC_ID.search(url)
    if not match:
        raise DocumentParseError("Invalid Google Docs URL")
    return match.group(1)


def google_doc_export_url(doc_id: str) -> str:
    return f"https://docs.google.com/document/d/{doc_id}/export?format=txt"
