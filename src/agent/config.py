"""Chat model settings read from the environment.

Any OpenAI-compatible endpoint works: point LLM_BASE_URL at it and set
LLM_MODEL to a model it serves.

Environment:
    LLM_API_KEY / OPENAI_API_KEY: provider key (first non-empty wins).
    LLM_BASE_URL: endpoint override.
    LLM_MODEL: model id, default ``gpt-4o``.
    LLM_TEMPERATURE, LLM_MAX_TOKENS: sampling settings.
    CHAT_MAX_DOCUMENT_CHARS: document characters sent with each request.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

load_dotenv()

DEFAULT_MODEL = "gpt-4o"
DEFAULT_MAX_DOCUMENT_CHARS = 4000


def _api_key_from_env() -> str:
    return os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY") or ""


class AgentConfig(BaseModel):
    """Model connection and generation settings for ``AgentService``.

    Attributes:
        api_key: Provider API key.
        base_url: Endpoint override, None for api.openai.com.
        model_name: Chat model id.
        temperature: Sampling temperature.
        max_tokens: Reply length cap.
        max_document_chars: Size of the document excerpt given to the model.
    """

    model_config = ConfigDict(validate_default=True, protected_namespaces=())

    api_key: str = Field(default_factory=_api_key_from_env)
    base_url: str | None = Field(default_factory=lambda: os.getenv("LLM_BASE_URL") or None)
    model_name: str = Field(default_factory=lambda: os.getenv("LLM_MODEL") or DEFAULT_MODEL)
    temperature: float = Field(
        default_factory=lambda: os.getenv("LLM_TEMPERATURE", "0.7"),
        ge=0.0,
        le=2.0,
    )
    max_tokens: int = Field(
        default_factory=lambda: os.getenv("LLM_MAX_TOKENS", "1024"),
        ge=1,
        le=128000,
    )
    max_document_chars: int = Field(
        default_factory=lambda: os.getenv(
            "CHAT_MAX_DOCUMENT_CHARS", str(DEFAULT_MAX_DOCUMENT_CHARS)
        ),
        ge=0,
    )

    @field_validator("api_key")
    @classmethod
    def require_api_key(cls, v: str) -> str:
        key = v.strip()
        if not key:
            raise ValueError("API key required. Set LLM_API_KEY or OPENAI_API_KEY in .env")
        return key


def get_agent_config() -> AgentConfig:
    """Build the agent configuration from the current environment.

    Raises:
        ValidationError: If no API key is set.
    """
    return AgentConfig()
