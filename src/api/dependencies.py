"""FastAPI dependencies shared by the routers.

Tests replace these through ``app.dependency_overrides``.
"""

import logging

import httpx
from fastapi import Request
from pydantic import ValidationError

from src.agent.chat_agent import AgentService, get_agent_service
from src.documents.config import DocumentConfig, get_document_config
from src.documents.fetcher import create_http_client

logger = logging.getLogger(__name__)


class AgentUnavailableError(Exception):
    """Raised when the chat agent cannot be configured (e.g. no API key)."""

    pass


def document_config() -> DocumentConfig:
    return get_document_config()


async def http_client(request: Request) -> httpx.AsyncClient:
    """Return the application-wide outbound HTTP client.

    The lifespan handler normally creates it; transports that skip lifespan
    events get one created on first use.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)
    if client is None:
        client = create_http_client()
        request.app.state.http_client = client
    return client


def agent_service() -> AgentService:
    try:
        return get_agent_service()
    except ValidationError as e:
        logger.error(f"Chat agent is not configured: {e}")
        raise AgentUnavailableError(
            "Chat service is not configured. Set LLM_API_KEY or OPENAI_API_KEY."
        ) from e
