"""Integration tests for the chat endpoints.

Most tests run against the fake agent service from conftest. Tests marked
``requires_api_key`` call the configured LLM and are skipped without a key.
"""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_check as check
from httpx import ASGITransport, AsyncClient

from src.agent.chat_agent import ChatServiceError
from src.api import app
from src.api.dependencies import AgentUnavailableError, agent_service
from src.models.schemas import StreamChunk, StreamStatus, TextAction
from tests.conftest import FakeAgentService


def has_llm_api_key() -> bool:
    """Check if an LLM API key is configured."""
    key = os.environ.get("LLM_API_KEY") or os.environ.get("OPENAI_API_KEY", "")
    return bool(key and not key.isspace())


requires_api_key = pytest.mark.skipif(
    not has_llm_api_key(),
    reason="LLM_API_KEY / OPENAI_API_KEY not set - skipping LLM integration test",
)

QUESTION = {"id": "m1", "role": "user", "content": "What is this about?"}


async def read_chunks(client: AsyncClient, payload: dict) -> list[StreamChunk]:
    """POST to the stream endpoint and parse every SSE data line."""
    chunks: list[StreamChunk] = []
    async with client.stream("POST", "/api/chat/stream", json=payload) as response:
        assert response.status_code == 200
        assert "text/event-stream" in response.headers["content-type"]
        async for line in response.aiter_lines():
            if line.startswith("data: "):
                chunks.append(StreamChunk.model_validate_json(line.removeprefix("data: ")))
    return chunks


class TestChatEndpoint:
    """Integration tests for POST /api/chat."""

    async def test_reply(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        response = await async_client.post("/api/chat", json={"messages": [QUESTION]})

        assert response.status_code == 200
        check.equal(
            response.json(),
            {"success": True, "message": "Echo: What is this about?", "error": None},
        )
        check.equal(len(fake_agent_service.requests), 1)

    async def test_camel_case_fields_reach_service(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        await async_client.post(
            "/api/chat",
            json={
                "messages": [QUESTION],
                "documentData": "Chapter one",
                "selectedText": "a passage",
                "action": "explain",
            },
        )

        request = fake_agent_service.requests[0]
        check.equal(request.document_data, "Chapter one")
        check.equal(request.selected_text, "a passage")
        check.equal(request.action, TextAction.EXPLAIN)

    async def test_service_failure_returns_500(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        fake_agent_service.error = ChatServiceError("rate limited")

        response = await async_client.post("/api/chat", json={"messages": [QUESTION]})

        assert response.status_code == 500
        body = response.json()
        check.is_false(body["success"])
        check.equal(body["error"], "Failed to get AI response: rate limited")

    async def test_unconfigured_agent_returns_503(self, async_client: AsyncClient) -> None:
        def unavailable() -> None:
            raise AgentUnavailableError("Chat service is not configured.")

        app.dependency_overrides[agent_service] = unavailable

        response = await async_client.post("/api/chat", json={"messages": [QUESTION]})

        assert response.status_code == 503
        check.is_false(response.json()["success"])
        check.equal(response.json()["error"], "Chat service is not configured.")

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"messages": []},
            {"messages": [{"role": "robot", "content": "hi"}]},
            {"messages": [QUESTION], "action": "translate"},
        ],
    )
    async def test_invalid_request_returns_422(self, async_client: AsyncClient, body: dict) -> None:
        response = await async_client.post("/api/chat", json=body)

        assert response.status_code == 422

    async def test_invalid_json_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/chat",
            content="not valid json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422


class TestChatStreamEndpoint:
    """Integration tests for POST /api/chat/stream SSE endpoint."""

    async def test_stream_sequence(self, async_client: AsyncClient) -> None:
        chunks = await read_chunks(async_client, {"messages": [QUESTION]})

        check.equal(chunks[0].status, StreamStatus.RECEIVED)
        check.is_false(chunks[0].done)
        check.equal(chunks[-1].status, StreamStatus.COMPLETE)
        check.is_true(chunks[-1].done)
        for chunk in chunks[:-1]:
            check.is_false(chunk.done)

        text = "".join(c.content for c in chunks if c.status == StreamStatus.GENERATING)
        check.equal(text, "Echo: What is this about?")

    async def test_stream_failure_ends_with_error_chunk(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        fake_agent_service.error = ChatServiceError("connection reset")

        chunks = await read_chunks(async_client, {"messages": [QUESTION]})

        final = chunks[-1]
        check.is_true(final.done)
        check.equal(final.status, StreamStatus.ERROR)
        check.equal(final.error, "connection reset")
        check.equal(sum(1 for c in chunks if c.done), 1)

    async def test_empty_messages_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/api/chat/stream", json={"messages": []})

        assert response.status_code == 422


class TestLiveChat:
    """Round trips against the configured completion API."""

    @pytest.fixture
    async def live_client(self) -> AsyncGenerator[AsyncClient]:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test", timeout=60) as client:
            yield client

    @requires_api_key
    async def test_reply_uses_document(self, live_client: AsyncClient) -> None:
        response = await live_client.post(
            "/api/chat",
            json={
                "messages": [
                    {"role": "user", "content": "What colour is the door? Answer in one word."}
                ],
                "documentData": "The front door of the house is painted green.",
            },
        )

        assert response.status_code == 200
        assert "green" in response.json()["message"].lower()

    @requires_api_key
    async def test_stream_has_content(self, live_client: AsyncClient) -> None:
        chunks = await read_chunks(
            live_client,
            {"messages": [{"role": "user", "content": "Say the word 'hello' and nothing else"}]},
        )

        text = "".join(c.content for c in chunks if not c.done)
        check.is_true(len(text) > 0)
        check.is_true(chunks[-1].done)
