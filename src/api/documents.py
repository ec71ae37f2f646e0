"""Document extraction and proxy endpoints.

The process endpoint fetches a remote document and returns its text; the
proxy endpoint relays the raw bytes so the browser can render documents from
hosts that do not allow cross-origin requests.
"""

import logging
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from src.api.dependencies import document_config, http_client
from src.documents.config import DocumentConfig
from src.documents.fetcher import DocumentFetchError, DocumentTooLargeError, fetch_document
from src.documents.processor import process_document
from src.models.schemas import DocumentRequest, DocumentResponse, ErrorResponse
from src.parsing.errors import DocumentParseError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["documents"])

HttpClient = Annotated[httpx.AsyncClient, Depends(http_client)]
Config = Annotated[DocumentConfig, Depends(document_config)]


def _url_required() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error="URL is required").model_dump(exclude_none=True),
    )


def _error(status_code: int, error: str, details: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details).model_dump(),
    )


def _fetch_error_status(e: DocumentFetchError) -> int:
    if isinstance(e, DocumentTooLargeError):
        return 413
    if e.status_code is not None:
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.post(
    "/process",
    response_model=DocumentResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def process(
    payload: DocumentRequest,
    client: HttpClient,
    config: Config,
) -> DocumentResponse | JSONResponse:
    """Fetch a document by URL and extract its text.

    Raises:
        400: URL missing.
        413: Document exceeds the size limit.
        502: Document host returned an error status.
        500: Network or parsing failure.
    """
    if not payload.url:
        return _url_required()

    try:
        data = await process_document(payload.url, client, config)
    except DocumentFetchError as e:
        logger.warning(f"Failed to fetch {payload.url}: {e}")
        return _error(_fetch_error_status(e), "Failed to process document", str(e))
    except DocumentParseError as e:
        logger.warning(f"Failed to parse {payload.url}: {e}")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to process document", str(e)
        )

    return DocumentResponse(success=True, data=data)


async def _proxy(url: str | None, client: httpx.AsyncClient, config: DocumentConfig) -> Response:
    if not url:
        return _url_required()

    logger.info(f"Proxying document: {url}")
    try:
        fetched = await fetch_document(url, client, config)
    except DocumentTooLargeError as e:
        return _error(413, "Failed to proxy document", str(e))
    except DocumentFetchError as e:
        if e.status_code is None:
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to proxy document", str(e)
            )
        return JSONResponse(
            status_code=e.status_code,
            content=ErrorResponse(
                error=f"Failed to fetch document: {e.status_code}"
            ).model_dump(exclude_none=True),
        )

    return Response(
        content=fetched.content,
        media_type=fetched.content_type,
        headers={"Content-Length": str(len(fetched.content))},
    )


@router.post("/proxy", response_class=Response)
async def proxy(payload: DocumentRequest, client: HttpClient, config: Config) -> Response:
    """Relay the raw bytes of a remote document."""
    return await _proxy(payload.url, client, config)


@router.get("/proxy", response_class=Response)
async def proxy_get(
    client: HttpClient,
    config: Config,
    url: Annotated[str | None, Query()] = None,
) -> Response:
    """GET variant of the proxy, usable as an iframe or download source."""
    return await _proxy(url.strip() if url else None, client, config)
