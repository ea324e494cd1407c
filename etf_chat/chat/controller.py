"""Send/stream orchestration for one chat turn.

Drives a single cycle: append the user message and an empty assistant
placeholder, open the reply stream, apply each decoded fragment to the
placeholder, and always return the store's flags to idle. Failures are
caught here and surface to observers only as store state.

Cycle states: Idle -> Sending -> Streaming -> Idle, with Sending -> Idle
when the stream never opens.
"""

import logging

from etf_chat.api.client import ApiClient, TransportError
from etf_chat.chat.config import ChatConfig, get_chat_config
from etf_chat.models.schemas import ChatRequest, Fragment, Message, Role
from etf_chat.parsing.sse_decoder import iter_events
from etf_chat.stores.chat_store import ChatStore

logger = logging.getLogger(__name__)


class ChatController:
    """Runs chat turns against the backend and mirrors them into a store.

    One cycle at a time: a send issued while another is in flight is
    rejected, not queued.
    """

    def __init__(
        self,
        store: ChatStore,
        client: ApiClient,
        config: ChatConfig | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            store: Conversation store this controller writes to.
            client: Transport used to open the reply stream.
            config: Optional chat configuration.
                    Loads from environment if not provided.
        """
        self._store = store
        self._client = client
        self._config = config or get_chat_config()

    @property
    def busy(self) -> bool:
        state = self._store.state
        return state.is_loading or state.is_streaming

    async def send_and_stream(self, text: str) -> bool:
        """Send a message and stream the reply into the store.

        Args:
            text: The user's message.

        Returns:
            True if a cycle ran, False if the call was rejected because
            the text is blank or another cycle is in flight.
        """
        message = text.strip()
        if not message or self.busy:
            return False

        # No await before set_loading, so the busy gate cannot be raced
        self._store.add_message(Message(role=Role.USER, content=message))
        self._store.add_message(Message(role=Role.ASSISTANT))
        self._store.set_loading(True)

        accumulated = ""
        try:
            body = ChatRequest(content=message).model_dump()
            async with self._client.open_stream(self._config.stream_path, body) as stream:
                self._store.set_streaming(True)
                # iter_events ends on its own after Done or at end of data
                async for event in iter_events(stream):
                    if isinstance(event, Fragment):
                        accumulated += event.text
                        self._store.update_last_message(accumulated)
            logger.debug(f"Stream finished with {len(accumulated)} characters")
        except TransportError as e:
            logger.warning(f"Chat stream failed: {e}")
            self._store.update_last_message(self._config.failure_notice)
        except Exception:
            logger.exception("Unexpected error while streaming chat reply")
            self._store.update_last_message(self._config.failure_notice)
        finally:
            self._store.set_streaming(False)
            self._store.set_loading(False)

        return True
