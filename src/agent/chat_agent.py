"""Agno agent service for document chat.

A thin passthrough: the client sends the whole conversation on every request,
so the agent keeps no session storage and no knowledge base. The only context
added server-side is the document excerpt, the selected passage and the
requested text action.

Architecture Decisions:

1. **Stateless Agent** - The browser owns the transcript (it persists it in
   user storage and can restore old conversations), so the agent is built
   without a database and every request carries its own history.

2. **Singleton Pattern** - Agent initialization is expensive (model client
   construction). The singleton reuses the same agent instance across requests.

3. **Service Wrapper** - Decouples the API from Agno's interface and converts
   provider failures into ``ChatServiceError`` for the routes to map.

4. **Fixed Document Budget** - Document text is cut to
   ``AgentConfig.max_document_chars`` before it reaches the model.
"""

import logging
from collections.abc import AsyncGenerator

from agno.agent import Agent
from agno.models.message import Message
from agno.models.openai import OpenAIChat

from src.agent.config import AgentConfig, get_agent_config
from src.agent.prompts import SYSTEM_PROMPT, WELCOME_MESSAGE_ID, build_context
from src.models.schemas import ChatRequest

logger = logging.getLogger(__name__)


class ChatServiceError(Exception):
    """Raised when the completion API call fails."""

    pass


class AgentService:
    """Service wrapping the Agno chat agent.

    Provides:
    - Conversion of client transcripts into model messages
    - Document and selection context injection
    - Complete and streaming reply interfaces
    - Centralized error handling
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the agent service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        model = OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

        return Agent(
            model=model,
            description="A document analysis assistant for PDF, Word and spreadsheet files.",
            instructions=[SYSTEM_PROMPT],
            markdown=True,
        )

    def build_messages(self, request: ChatRequest) -> list[Message]:
        """Translate a chat request into the message list sent to the model.

        Client ``system`` messages and the UI welcome message are dropped.
        Document context, when present, is placed first as a system message.
        """
        messages: list[Message] = []

        context = build_context(
            request.document_data,
            request.selected_text,
            request.action,
            self._config.max_document_chars,
        )
        if context:
            messages.append(Message(role="system", content=context))

        for message in request.messages:
            if message.role == "system" or message.id == WELCOME_MESSAGE_ID:
                continue
            messages.append(Message(role=message.role, content=message.content))

        return messages

    async def get_reply(self, request: ChatRequest) -> str:
        """Get the complete reply for a conversation.

        Raises:
            ChatServiceError: If the completion call fails.
        """
        messages = self.build_messages(request)
        try:
            response = await self._agent.arun(messages)
        except Exception as e:
            logger.error(f"Completion request failed: {e}")
            raise ChatServiceError(str(e)) from e

        return response.content or ""

    async def stream_reply(self, request: ChatRequest) -> AsyncGenerator[str]:
        """Stream reply chunks for a conversation.

        Yields:
            Response text chunks as they arrive.

        Raises:
            ChatServiceError: If the completion call fails mid-stream.
        """
        messages = self.build_messages(request)
        try:
            response_stream = self._agent.arun(messages, stream=True)

            async for chunk in response_stream:
                if hasattr(chunk, "content") and isinstance(chunk.content, str) and chunk.content:
                    yield chunk.content

        except Exception as e:
            logger.error(f"Streaming completion failed: {e}")
            raise ChatServiceError(str(e)) from e


# Module-level singleton instance
_agent_service: AgentService | None = None


def get_agent_service() -> AgentService:
    """Get or create the global agent service.

    Returns:
        The AgentService instance.

    Raises:
        ValidationError: If no API key is configured.
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service
