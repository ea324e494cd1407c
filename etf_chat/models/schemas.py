import itertools
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Shared by every store in the process so ids never collide within a session
_message_ids = itertools.count(1)


def _next_message_id() -> int:
    return next(_message_ids)


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


class Role(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single chat message.

    Frozen: content changes produce a new instance through ``model_copy``,
    so snapshots handed to observers never change underneath them.

    Attributes:
        id: Monotonically increasing identifier, unique for the process.
        role: Who produced the message.
        content: Message text; empty for a streaming placeholder.
        timestamp: ISO-8601 creation instant, never revised.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(default_factory=_next_message_id)
    role: Role
    content: str = ""
    timestamp: str = Field(default_factory=_utc_now_iso)


class ConversationState(BaseModel):
    """Immutable snapshot of the conversation.

    Attributes:
        messages: Messages in display order.
        is_loading: A send cycle is in progress.
        is_streaming: Fragments are being applied to the trailing message.
    """

    model_config = ConfigDict(frozen=True)

    messages: tuple[Message, ...] = ()
    is_loading: bool = False
    is_streaming: bool = False


class Fragment(BaseModel):
    """Incremental piece of assistant text decoded from the stream."""

    model_config = ConfigDict(frozen=True)

    text: str


class Done(BaseModel):
    """Terminal sentinel of a stream."""

    model_config = ConfigDict(frozen=True)


StreamEvent = Fragment | Done


class ChatRequest(BaseModel):
    """Request payload for the chat endpoints.

    Attributes:
        content: The user's message.
    """

    content: str = Field(..., description="The user's message")


class LoginRequest(BaseModel):
    """Credentials posted to the login endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    password: str


class SignupRequest(BaseModel):
    """Account details posted to the user registration endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    password: str
    name: str
    email: str
