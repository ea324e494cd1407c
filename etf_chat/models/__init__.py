"""Pydantic models for conversation state and API payloads.

Provides type safety, validation and immutable snapshots for observers.

Models:
    - Message: Individual message in the conversation
    - ConversationState: Message list plus loading/streaming flags
    - Fragment / Done: Events decoded from the chat stream
    - ChatRequest, LoginRequest, SignupRequest: Outgoing request bodies
"""

from etf_chat.models.schemas import (
    ChatRequest,
    ConversationState,
    Done,
    Fragment,
    LoginRequest,
    Message,
    Role,
    SignupRequest,
    StreamEvent,
)

__all__ = [
    "ChatRequest",
    "ConversationState",
    "Done",
    "Fragment",
    "LoginRequest",
    "Message",
    "Role",
    "SignupRequest",
    "StreamEvent",
]
