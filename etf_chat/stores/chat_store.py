"""Conversation store: the single source of truth for chat state.

Every mutation builds a new immutable ConversationState and swaps it in
with one assignment before notifying subscribers, so an observer only ever
sees whole snapshots.
"""

import logging
from collections.abc import Callable

from etf_chat.models.schemas import ConversationState, Message, Role

logger = logging.getLogger(__name__)

DEFAULT_GREETING = (
    "Hello! I'm the ETF alert assistant. "
    "Ask me anything about ETFs or your investments."
)

Listener = Callable[[ConversationState], None]


class ChatStore:
    """Observable container for the message list and its two flags.

    Constructed explicitly and handed to its consumers; there is no
    module-level instance.
    """

    def __init__(self, greeting: str = DEFAULT_GREETING) -> None:
        self._greeting = greeting
        self._state = ConversationState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> ConversationState:
        return self._state

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._state.messages

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def is_streaming(self) -> bool:
        return self._state.is_streaming

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with each new snapshot.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, state: ConversationState) -> None:
        self._state = state
        for listener in list(self._listeners):
            # A listener mutated the store; the nested commit already
            # delivered the newer snapshot to everyone.
            if self._state is not state:
                return
            try:
                listener(state)
            except Exception:
                logger.exception("Chat store listener failed")

    def add_message(self, message: Message) -> None:
        self._commit(
            self._state.model_copy(update={"messages": (*self._state.messages, message)})
        )

    def update_last_message(self, content: str) -> None:
        """Replace the trailing message's content with the full text given."""
        messages = self._state.messages
        if not messages:
            return
        last = messages[-1].model_copy(update={"content": content})
        self._commit(self._state.model_copy(update={"messages": (*messages[:-1], last)}))

    def set_loading(self, loading: bool) -> None:
        self._commit(self._state.model_copy(update={"is_loading": loading}))

    def set_streaming(self, streaming: bool) -> None:
        self._commit(self._state.model_copy(update={"is_streaming": streaming}))

    def clear_messages(self) -> None:
        self._commit(self._state.model_copy(update={"messages": ()}))

    def initialize_chat(self) -> None:
        """Reset the conversation to the single greeting message."""
        greeting = Message(role=Role.ASSISTANT, content=self._greeting)
        self._commit(self._state.model_copy(update={"messages": (greeting,)}))
