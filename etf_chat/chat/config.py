"""Chat client configuration with environment variable loading.

Pydantic-based configuration for the transport client and controller.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from etf_chat.stores.chat_store import DEFAULT_GREETING

# Load environment variables from .env file
load_dotenv()

DEFAULT_FAILURE_NOTICE = (
    "Sorry, something went wrong while getting a response. Please try again."
)


class ChatConfig(BaseModel):
    """Configuration for the chat client.

    Attributes:
        api_base_url: Root URL of the assistant backend.
        stream_path: Endpoint that streams assistant replies.
        request_timeout: Seconds before a call is abandoned (None = never).
        greeting: Seed assistant message shown in a new conversation.
        failure_notice: Text that replaces a reply whose stream failed.
    """

    model_config = ConfigDict(validate_default=True)

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
        description="Assistant backend base URL",
    )
    stream_path: str = Field(
        default_factory=lambda: os.getenv("CHAT_STREAM_PATH", "/chat/stream"),
        description="Streaming chat endpoint path",
    )
    request_timeout: float | None = Field(
        default_factory=lambda: os.getenv("API_TIMEOUT") or None,
        ge=0.0,
        description="Request timeout in seconds; unset means no timeout",
    )
    greeting: str = Field(default=DEFAULT_GREETING, description="Seed assistant message")
    failure_notice: str = Field(
        default=DEFAULT_FAILURE_NOTICE,
        description="Shown in place of a reply that failed to stream",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require a base URL and drop any trailing slash."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("API base URL required. Set API_BASE_URL in .env")
        return v

    @field_validator("stream_path")
    @classmethod
    def validate_stream_path(cls, v: str) -> str:
        """Ensure the stream path is rooted."""
        v = v.strip()
        return v if v.startswith("/") else f"/{v}"


def get_chat_config() -> ChatConfig:
    """Create chat configuration from environment.

    Returns:
        Configured ChatConfig instance.

    Raises:
        ValueError: If an environment value is invalid.
    """
    return ChatConfig()
