"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src import __version__
from src.api.chat import router as chat_router
from src.api.dependencies import AgentUnavailableError
from src.api.documents import router as documents_router
from src.documents.fetcher import create_http_client
from src.models.schemas import ChatResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Opens the shared outbound HTTP client on startup and closes it on
    shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting DocChat API...")
    app.state.http_client = create_http_client()
    yield
    logger.info("Shutting down DocChat API...")
    await app.state.http_client.aclose()


async def agent_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=ChatResponse(success=False, error=str(exc)).model_dump(),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="DocChat API",
        description=(
            "Document viewer and chat assistant API. Fetches PDF, Word, Google "
            "Docs and plain text documents by URL, extracts their text, and "
            "answers questions about them through a hosted LLM. Spreadsheets "
            "are returned as embeddable viewer URLs."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.add_exception_handler(AgentUnavailableError, agent_unavailable_handler)

    application.include_router(documents_router)
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "docchat"}

    return application


app = create_app()
