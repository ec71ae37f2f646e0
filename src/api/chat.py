"""Chat endpoints: complete replies and SSE streaming."""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, StreamingResponse

from src.agent.chat_agent import AgentService, ChatServiceError
from src.api.dependencies import agent_service
from src.models.schemas import ChatRequest, ChatResponse, StreamChunk, StreamStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])

Service = Annotated[AgentService, Depends(agent_service)]


def _sse(chunk: StreamChunk) -> str:
    return f"data: {chunk.model_dump_json()}\n\n"


@router.post(
    "",
    response_model=ChatResponse,
    responses={500: {"model": ChatResponse}, 503: {"model": ChatResponse}},
)
async def chat(request: ChatRequest, service: Service) -> ChatResponse | JSONResponse:
    """Answer the latest message of a conversation about a document."""
    try:
        message = await service.get_reply(request)
    except ChatServiceError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ChatResponse(success=False, error=f"Failed to get AI response: {e}").model_dump(),
        )

    return ChatResponse(success=True, message=message)


@router.post("/stream")
async def chat_stream(request: ChatRequest, service: Service) -> StreamingResponse:
    """Stream the reply as Server-Sent Events.

    Every event is a ``StreamChunk``; the last one has ``done=true``. Failures
    after the stream has started arrive as a final chunk with an error.
    """

    async def event_stream() -> AsyncGenerator[str]:
        yield _sse(StreamChunk(content="", done=False, status=StreamStatus.RECEIVED))
        try:
            async for text in service.stream_reply(request):
                yield _sse(
                    StreamChunk(content=text, done=False, status=StreamStatus.GENERATING)
                )
        except ChatServiceError as e:
            yield _sse(
                StreamChunk(content="", done=True, status=StreamStatus.ERROR, error=str(e))
            )
            return
        yield _sse(StreamChunk(content="", done=True, status=StreamStatus.COMPLETE))

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
