"""Pytest fixtures and shared test configuration.

Fixtures:
    - chat_store: Empty conversation store
    - auth_store: Signed-out credential store
    - chat_config: Configuration independent of the environment
    - stream_transport: Factory for MockTransports replaying byte chunks
"""

import asyncio
from collections.abc import AsyncIterator, Callable, Iterable

import httpx
import pytest

from etf_chat.chat.config import ChatConfig
from etf_chat.stores.auth_store import AuthStore
from etf_chat.stores.chat_store import ChatStore

FAILURE_NOTICE = "Something went wrong."


async def replay(chunks: Iterable[bytes], gate: asyncio.Event | None = None) -> AsyncIterator[bytes]:
    """Yield chunks one at a time, optionally waiting on a gate first."""
    if gate is not None:
        await gate.wait()
    for chunk in chunks:
        await asyncio.sleep(0)
        yield chunk


@pytest.fixture
def chat_store() -> ChatStore:
    """Return an empty conversation store."""
    return ChatStore(greeting="Hello from the test assistant.")


@pytest.fixture
def auth_store() -> AuthStore:
    """Return a signed-out credential store."""
    return AuthStore()


@pytest.fixture
def chat_config() -> ChatConfig:
    """Return a configuration that ignores the environment."""
    return ChatConfig(
        api_base_url="http://test",
        stream_path="/chat/stream",
        request_timeout=None,
        failure_notice=FAILURE_NOTICE,
    )


@pytest.fixture
def stream_transport() -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport that streams the given chunks.

    Returns:
        Factory taking the chunks plus optional ``status_code`` and
        ``gate``; requests seen are appended to ``transport.requests``.
    """

    def factory(
        chunks: Iterable[bytes] = (),
        status_code: int = 200,
        gate: asyncio.Event | None = None,
    ) -> httpx.MockTransport:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status_code, content=replay(list(chunks), gate))

        transport = httpx.MockTransport(handler)
        transport.requests = requests  # type: ignore[attr-defined]
        return transport

    return factory
