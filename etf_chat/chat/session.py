"""Per-tab chat session.

Bundles the store, credentials, transport client and controller that one
browser tab uses, and ties their release to the page client's lifetime.
"""

import logging
from collections.abc import Callable
from typing import Any, Protocol

import httpx

from etf_chat.api.client import ApiClient
from etf_chat.chat.config import ChatConfig, get_chat_config
from etf_chat.chat.controller import ChatController
from etf_chat.stores.auth_store import AuthStore
from etf_chat.stores.chat_store import ChatStore, Listener

logger = logging.getLogger(__name__)


class PageClient(Protocol):
    """The part of a NiceGUI client the session hooks into."""

    id: str

    def on_delete(self, handler: Callable[..., Any]) -> None: ...


class ChatSession:
    """Store, credentials, transport client and controller for one tab.

    Args:
        config: Client configuration; read from the environment if omitted.
        transport: Optional httpx transport for the API client.
    """

    def __init__(
        self,
        config: ChatConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or get_chat_config()
        self.store = ChatStore(greeting=self.config.greeting)
        self.store.initialize_chat()
        self.auth = AuthStore()
        self.api = ApiClient(
            self.auth,
            base_url=self.config.api_base_url,
            timeout=self.config.request_timeout,
            transport=transport,
        )
        self.controller = ChatController(self.store, self.api, self.config)
        self._unsubscribers: list[Callable[[], None]] = []

    def observe(self, listener: Listener) -> None:
        """Subscribe a listener that is dropped when the session closes."""
        self._unsubscribers.append(self.store.subscribe(listener))

    def bind(self, client: PageClient) -> None:
        """Release the session once the page client is deleted.

        Disconnects are not hooked: the browser may reconnect to the same
        page, which must keep working.
        """
        async def release() -> None:
            await self.close()
            logger.debug(f"Released chat session for client {client.id}")

        client.on_delete(release)

    async def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        await self.api.aclose()
