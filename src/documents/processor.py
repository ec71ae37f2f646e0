"""Document processing: fetch a URL and dispatch to the matching extractor."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from src.documents.config import DocumentConfig, get_document_config
from src.documents.fetcher import fetch_document, fetch_google_doc_text
from src.models.schemas import DocumentData, DocumentType
from src.parsing import get_document_type, get_file_name, parse_pdf, parse_text, parse_word

logger = logging.getLogger(__name__)

OFFICE_VIEWER_URL = "https://view.officeapps.live.com/op/embed.aspx?src="


def embed_url(url: str, document_type: DocumentType) -> str:
    """Return a URL that renders a spreadsheet inside an iframe."""
    if document_type is DocumentType.EXCEL:
        return f"{OFFICE_VIEWER_URL}{quote(url, safe='')}"
    if document_type is DocumentType.GOOGLE_SHEET:
        return url.replace("/edit", "/edit?usp=sharing&output=html&widget=true")
    return url


async def process_document(
    url: str,
    client: httpx.AsyncClient,
    config: DocumentConfig | None = None,
) -> DocumentData:
    """Fetch a document and extract its text.

    Spreadsheets are not downloaded; the result only tells the viewer how to
    embed them.

    Raises:
        DocumentFetchError: If the document cannot be downloaded.
        DocumentParseError: If the downloaded bytes cannot be parsed.
    """
    config = config or get_document_config()
    document_type = get_document_type(url)
    name = get_file_name(url)
    logger.info(f"Processing document {url} as {document_type.value}")

    if document_type.uses_iframe:
        return DocumentData(
            url=url,
            name=name,
            type=document_type,
            content=None,
            metadata={"use_iframe": True, "view_url": embed_url(url, document_type)},
        )

    metadata: dict[str, Any] = {}
    if document_type is DocumentType.GOOGLE_DOC:
        content = await fetch_google_doc_text(url, client, config)
    else:
        fetched = await fetch_document(url, client, config)
        if document_type is DocumentType.PDF:
            pdf = parse_pdf(fetched.content, max_size=config.max_document_size)
            content = pdf.text
            metadata = dict(pdf.metadata)
        elif document_type is DocumentType.WORD:
            content = parse_word(fetched.content)
        else:
            content = parse_text(fetched.content)

    logger.info(f"Extracted {len(content)} characters from {name}")
    return DocumentData(
        url=url,
        name=name,
        type=document_type,
        content=content,
        metadata=metadata,
    )
