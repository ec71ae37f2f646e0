"""Settings for fetching remote documents.

Loaded from environment variables (and ``.env``) in the same manner as the
agent configuration.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class DocumentConfig(BaseModel):
    """Configuration for remote document retrieval.

    Attributes:
        user_agent: User-Agent sent to document hosts. Some hosts refuse
            requests that do not look like a browser.
        fetch_timeout: Per-request timeout in seconds.
        max_document_size: Largest accepted document body in bytes.
    """

    model_config = ConfigDict(validate_default=True)

    user_agent: str = Field(
        default_factory=lambda: os.getenv("DOC_USER_AGENT", BROWSER_USER_AGENT),
    )
    fetch_timeout: float = Field(
        default_factory=lambda: float(os.getenv("DOC_FETCH_TIMEOUT", "30")),
        gt=0,
        le=600,
    )
    max_document_size: int = Field(
        default_factory=lambda: int(os.getenv("DOC_MAX_BYTES", str(25 * 1024 * 1024))),
        ge=1,
    )


def get_document_config() -> DocumentConfig:
    """Create document configuration from environment."""
    return DocumentConfig()
