"""Remote document handling for the extraction and proxy endpoints.

Responsibilities:
    - Download documents with a browser User-Agent and a size limit
    - Export Google Docs as plain text
    - Dispatch downloaded bytes to the format-specific parser
    - Build iframe URLs for spreadsheets
"""

from src.documents.config import DocumentConfig, get_document_config
from src.documents.fetcher import (
    DocumentFetchError,
    DocumentTooLargeError,
    FetchedDocument,
    create_http_client,
    fetch_document,
    fetch_google_doc_text,
)
from src.documents.processor import embed_url, process_document

__all__ = [
    "DocumentConfig",
    "DocumentFetchError",
    "DocumentTooLargeError",
    "FetchedDocument",
    "create_http_client",
    "embed_url",
    "fetch_document",
    "fetch_google_doc_text",
    "get_document_config",
    "process_document",
]
