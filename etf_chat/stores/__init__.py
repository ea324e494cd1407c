"""State containers shared between the UI and the chat controller.

Responsibilities:
    - Conversation messages plus loading/streaming flags
    - Observer notification with immutable snapshots
    - Current credentials for request headers
"""

from etf_chat.stores.auth_store import AuthStore
from etf_chat.stores.chat_store import DEFAULT_GREETING, ChatStore

__all__ = ["DEFAULT_GREETING", "AuthStore", "ChatStore"]
