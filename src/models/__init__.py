"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - DocumentRequest / DocumentResponse: extraction and proxy endpoints
    - DocumentData: processed document with text and metadata
    - ChatRequest / ChatResponse: chat completion endpoint
    - StreamChunk: one SSE event of the streaming chat endpoint
"""

from src.models.schemas import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    DocumentData,
    DocumentRequest,
    DocumentResponse,
    DocumentType,
    ErrorResponse,
    StreamChunk,
    StreamStatus,
    TextAction,
)

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "DocumentData",
    "DocumentRequest",
    "DocumentResponse",
    "DocumentType",
    "ErrorResponse",
    "StreamChunk",
    "StreamStatus",
    "TextAction",
]
