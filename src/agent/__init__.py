"""Agno agent logic for document chat.

Forwards the conversation plus a truncated document excerpt to a hosted
completion API.

Responsibilities:
    - Agent initialization with OpenAI models
    - Document, selection and text-action context
    - Complete and streaming reply generation

Maintains clean separation from the HTTP layer.
"""

from src.agent.chat_agent import AgentService, ChatServiceError, get_agent_service
from src.agent.config import AgentConfig, get_agent_config

__all__ = [
    "AgentConfig",
    "AgentService",
    "ChatServiceError",
    "get_agent_config",
    "get_agent_service",
]
