"""Remote document retrieval over HTTP with httpx."""

import logging
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel

from src.documents.config import DocumentConfig, get_document_config
from src.parsing.document_type import get_google_doc_id, google_doc_export_url

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
EMPTY_GOOGLE_DOC = "No content found in Google Document"


class FetchedDocument(BaseModel):
    """Raw document body and the content type reported by the host."""

    content: bytes
    content_type: str = DEFAULT_CONTENT_TYPE


class DocumentFetchError(Exception):
    """Raised when a document cannot be downloaded.

    Attributes:
        status_code: Upstream (or size-limit) HTTP status, None for transport
            failures.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DocumentTooLargeError(DocumentFetchError):
    """Raised when a body exceeds ``DocumentConfig.max_document_size``.

    The upstream response itself succeeded; the limit is local.
    """

    def __init__(self, message: str, status_code: int | None = 413) -> None:
        super().__init__(message, status_code=status_code)


def _too_large(config: DocumentConfig) -> DocumentTooLargeError:
    limit_mb = config.max_document_size / (1024 * 1024)
    return DocumentTooLargeError(f"Document exceeds maximum allowed size ({limit_mb:.1f}MB)")


def create_http_client(config: DocumentConfig | None = None) -> httpx.AsyncClient:
    """Build the client used for all outbound document requests."""
    config = config or get_document_config()
    return httpx.AsyncClient(
        timeout=config.fetch_timeout,
        follow_redirects=True,
        headers={"User-Agent": config.user_agent},
    )


async def fetch_document(
    url: str,
    client: httpx.AsyncClient,
    config: DocumentConfig | None = None,
) -> FetchedDocument:
    """Download a document.

    The body is streamed and abandoned as soon as it passes the size limit,
    so an oversized document is never held in memory in full.

    Args:
        url: Document URL.
        client: Shared HTTP client.
        config: Size limit and User-Agent; loaded from environment if omitted.

    Returns:
        The body and its content type.

    Raises:
        DocumentTooLargeError: If the body is larger than the configured limit.
        DocumentFetchError: On malformed URLs, transport errors or non-2xx
            responses.
    """
    config = config or get_document_config()

    try:
        urlparse(url)
    except ValueError as e:
        raise DocumentFetchError(f"Invalid document URL: {e}") from e

    try:
        async with client.stream(
            "GET", url, headers={"User-Agent": config.user_agent}
        ) as response:
            if not response.is_success:
                logger.warning(f"Upstream returned {response.status_code} for {url}")
                raise DocumentFetchError(
                    f"HTTP error! status: {response.status_code}",
                    status_code=response.status_code,
                )

            declared = response.headers.get("content-length", "")
            if declared.isdigit() and int(declared) > config.max_document_size:
                logger.warning(f"Refusing {url}: Content-Length {declared} over limit")
                raise _too_large(config)

            content = bytearray()
            async for chunk in response.aiter_bytes():
                content.extend(chunk)
                if len(content) > config.max_document_size:
                    logger.warning(f"Aborted {url}: body over size limit")
                    raise _too_large(config)

            content_type = response.headers.get("content-type", DEFAULT_CONTENT_TYPE)
    except (httpx.RequestError, httpx.InvalidURL) as e:
        raise DocumentFetchError(f"Failed to fetch document: {e}") from e

    return FetchedDocument(content=bytes(content), content_type=content_type)


async def fetch_google_doc_text(
    url: str,
    client: httpx.AsyncClient,
    config: DocumentConfig | None = None,
) -> str:
    """Export a Google Doc as plain text.

    Raises:
        DocumentParseError: If the URL has no document id.
        DocumentFetchError: If the export request fails.
    """
    export_url = google_doc_export_url(get_google_doc_id(url))
    try:
        fetched = await fetch_document(export_url, client, config)
    except DocumentFetchError as e:
        raise type(e)(f"Failed to export Google Doc: {e}", status_code=e.status_code) from e

    text = fetched.content.decode("utf-8", errors="replace").lstrip("\ufeff")
    return text or EMPTY_GOOGLE_DOC
