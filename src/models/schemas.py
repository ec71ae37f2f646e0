"""Pydantic models for the document and chat endpoints.

Field names are snake_case; the chat request also accepts the camelCase keys
browser clients send (``documentData``, ``selectedText``).
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DocumentType(str, Enum):
    """Supported document kinds, detected from the URL."""

    PDF = "pdf"
    WORD = "word"
    EXCEL = "excel"
    GOOGLE_DOC = "google-doc"
    GOOGLE_SHEET = "google-sheet"
    TEXT = "text"

    @property
    def uses_iframe(self) -> bool:
        """Spreadsheets are embedded rather than extracted."""
        return self in (DocumentType.EXCEL, DocumentType.GOOGLE_SHEET)


class TextAction(str, Enum):
    """Operations a user can request on a highlighted passage."""

    SUMMARIZE = "summarize"
    EXPLAIN = "explain"


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    RECEIVED = "received"
    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class DocumentRequest(BaseModel):
    """Request payload for the process and proxy endpoints.

    ``url`` is optional at the schema level so the routes can answer a missing
    URL with 400 instead of a validation error.
    """

    url: str | None = None

    @field_validator("url", mode="before")
    @classmethod
    def strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v


class DocumentData(BaseModel):
    """A processed document.

    Attributes:
        url: Source URL as supplied by the user.
        name: File name derived from the URL.
        type: Detected document type.
        content: Extracted plain text, None for embedded spreadsheets.
        metadata: Format-specific metadata (page count, title, iframe URL...).
        processed_at: UTC time the document was processed.
    """

    url: str
    name: str
    type: DocumentType
    content: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    processed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class DocumentResponse(BaseModel):
    success: bool
    data: DocumentData | None = None


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class ChatMessage(BaseModel):
    """A single chat message in the conversation."""

    id: str | None = None
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    """Request payload for the chat endpoints.

    Attributes:
        messages: Conversation so far, oldest first, ending with the user turn.
        document_data: Extracted document text (truncated before sending).
        selected_text: Passage the user highlighted in the viewer.
        action: Requested operation on the selected passage.
    """

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(..., min_length=1)
    document_data: str | None = Field(None, alias="documentData")
    selected_text: str | None = Field(None, alias="selectedText")
    action: TextAction | None = None

    @field_validator("selected_text", mode="before")
    @classmethod
    def blank_selection_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ChatResponse(BaseModel):
    """Reply from the chat endpoint.

    ``message`` is set on success, ``error`` on failure.
    """

    success: bool
    message: str | None = None
    error: str | None = None


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text content of this chunk.
        done: Whether this is the final chunk.
        status: Current processing status.
        error: Error message if something went wrong.
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None
