"""Chat turn orchestration.

Responsibilities:
    - Client configuration loaded from the environment
    - One send/stream cycle per user message
    - Mapping transport and stream failures to a visible notice
    - Per-tab session wiring released with the page client

Maintains clean separation between the transport and the UI: the UI only
reads the store.
"""

from etf_chat.chat.config import ChatConfig, get_chat_config
from etf_chat.chat.controller import ChatController
from etf_chat.chat.session import ChatSession

__all__ = ["ChatConfig", "ChatController", "ChatSession", "get_chat_config"]
