"""HTTP client the UI uses to reach the DocChat API."""

import json
import logging
import os
from collections.abc import Callable
from typing import Any

import httpx

from src.models.schemas import TextAction

logger = logging.getLogger(__name__)

DEFAULT_PORT = "8000"


def api_base_url() -> str:
    """API root: ``API_BASE_URL``, else the local server on ``PORT``."""
    return os.getenv("API_BASE_URL") or f"http://localhost:{os.getenv('PORT', DEFAULT_PORT)}"


class ApiClientError(Exception):
    """Raised when an API call fails; the message is shown to the user."""

    pass


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"API error: {response.status_code}"
    return body.get("details") or body.get("error") or f"API error: {response.status_code}"


async def load_document(
    url: str,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Ask the API to process a document and return its ``data`` payload."""
    base_url = base_url or api_base_url()
    async with httpx.AsyncClient(base_url=base_url, timeout=120.0, transport=transport) as client:
        try:
            response = await client.post("/api/documents/process", json={"url": url})
        except httpx.RequestError as e:
            raise ApiClientError(f"Connection failed: {e}") from e

    if not response.is_success:
        raise ApiClientError(_error_message(response))

    result = response.json()
    if not result.get("success") or not result.get("data"):
        raise ApiClientError("Invalid response from server")
    return result["data"]


def chat_payload(
    messages: list[dict[str, Any]],
    document_data: str | None,
    selected_text: str | None,
    action: TextAction | None,
) -> dict[str, Any]:
    return {
        "messages": messages,
        "documentData": document_data,
        "selectedText": selected_text or None,
        "action": action.value if action else None,
    }


async def stream_chat(
    payload: dict[str, Any],
    on_chunk: Callable[[str], None],
    on_complete: Callable[[], None],
    on_error: Callable[[str], None],
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Consume the SSE stream from /api/chat/stream."""
    base_url = base_url or api_base_url()
    async with httpx.AsyncClient(base_url=base_url, timeout=120.0, transport=transport) as client:
        try:
            async with client.stream(
                "POST",
                "/api/chat/stream",
                json=payload,
                headers={"Accept": "text/event-stream"},
            ) as response:
                if not response.is_success:
                    await response.aread()
                    on_error(_error_message(response))
                    return
                async for line in response.aiter_lines():
                    if not line.startswith("data: "):
                        continue
                    try:
                        data = json.loads(line[6:])
                    except json.JSONDecodeError:
                        data = None
                    if not isinstance(data, dict):
                        logger.warning(f"Malformed stream event: {line[:100]}")
                        on_error("Invalid response from server")
                        return
                    if data.get("error"):
                        on_error(data["error"])
                        return
                    if content := data.get("content"):
                        on_chunk(content)
                    if data.get("done"):
                        on_complete()
                        return
                on_complete()
        except httpx.RequestError as e:
            logger.warning(f"Chat stream failed: {e}")
            on_error(f"Connection failed: {e}")
