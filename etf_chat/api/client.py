"""HTTP transport for the assistant backend.

Wraps a single httpx.AsyncClient with:
- Auth header injection from a credential provider
- Uniform translation of failures into TransportError
- Streaming calls that hand back the raw, undecoded response body
- The backend's user, settings, ETF and chat endpoints
"""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Protocol

import httpx

from etf_chat.models.schemas import ChatRequest, LoginRequest, SignupRequest, StreamEvent
from etf_chat.parsing.sse_decoder import iter_events

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class CredentialProvider(Protocol):
    """Source of authentication headers."""

    def get_auth_headers(self) -> dict[str, str]:
        """Return request headers for the current credentials."""


class TransportError(Exception):
    """Raised when a request fails on the network or with a non-2xx status.

    Attributes:
        status_code: HTTP status of the failed response, None for
            network failures.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StreamFailure(TransportError):
    """Raised when reading an already opened stream fails."""


def _status_message(status_code: int) -> str:
    return f"HTTP error! status: {status_code}"


def _error_message(response: httpx.Response) -> str:
    """Extract the server's ``detail`` message from an error response.

    Args:
        response: A non-2xx response whose body has been read.

    Returns:
        The detail text, or a generic status message if the body is
        absent or not the expected JSON.
    """
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _status_message(response.status_code)

    if isinstance(data, dict) and isinstance(data.get("detail"), str) and data["detail"]:
        return data["detail"]
    return _status_message(response.status_code)


class ByteStream:
    """Live response body of a streaming call, yielded chunk by chunk."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    async def __aiter__(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as e:
            logger.error(f"Stream read failed: {e}")
            raise StreamFailure(f"Stream interrupted: {e}") from e


class ApiClient:
    """Client for the assistant backend.

    Args:
        credentials: Provider of auth headers merged into every request.
        base_url: Backend root URL.
        timeout: Seconds before a call is abandoned; None waits forever.
        transport: Optional httpx transport, e.g. a MockTransport in tests.
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._credentials = credentials
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()

    def _ensure_open(self, path: str) -> None:
        if self._client.is_closed:
            logger.error(f"API request failed: {path}: client is closed")
            raise TransportError("Client is closed")

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            **self._credentials.get_auth_headers(),
            **(extra or {}),
        }

    async def request(
        self,
        path: str,
        method: str = "GET",
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Perform a unary JSON call.

        Args:
            path: Endpoint path relative to the base URL.
            method: HTTP method.
            json: Optional JSON-serialisable request body.
            params: Optional query parameters.
            headers: Extra headers, overriding the defaults.

        Returns:
            The decoded JSON body, or None if the body is empty.

        Raises:
            TransportError: On network failure, non-2xx status, a success
                body that is not JSON, or after the client was closed.
        """
        self._ensure_open(path)
        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                params=params,
                headers=self._headers(headers),
            )
        except httpx.RequestError as e:
            logger.error(f"API request failed: {method} {path}: {e}")
            raise TransportError(str(e) or "Network error") from e

        if not response.is_success:
            message = _error_message(response)
            logger.error(f"API request failed: {method} {path}: {message}")
            raise TransportError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except (ValueError, UnicodeDecodeError) as e:
            logger.error(f"API response was not JSON: {method} {path}: {e}")
            raise TransportError(f"Invalid JSON response: {e}", response.status_code) from e

    @asynccontextmanager
    async def open_stream(self, path: str, body: dict[str, Any]) -> AsyncIterator[ByteStream]:
        """Open a streaming POST and yield its undecoded body.

        The response is closed when the context exits. No retries are made.

        Args:
            path: Endpoint path relative to the base URL.
            body: JSON request body.

        Yields:
            The live response body.

        Raises:
            TransportError: On network failure, non-2xx status, or after
                the client was closed.
        """
        self._ensure_open(path)
        request = self._client.build_request("POST", path, json=body, headers=self._headers())
        try:
            response = await self._client.send(request, stream=True)
        except httpx.RequestError as e:
            logger.error(f"Stream request failed: {path}: {e}")
            raise TransportError(str(e) or "Network error") from e

        try:
            if not response.is_success:
                message = _status_message(response.status_code)
                logger.error(f"Stream request failed: {path}: {message}")
                raise TransportError(message, status_code=response.status_code)
            yield ByteStream(response)
        finally:
            await response.aclose()

    # Authentication

    async def login(self, user_id: str, password: str) -> Any:
        body = LoginRequest(user_id=user_id, password=password)
        return await self.request("/auth/login", "POST", json=body.model_dump(by_alias=True))

    async def signup(self, user_id: str, password: str, name: str, email: str) -> Any:
        body = SignupRequest(user_id=user_id, password=password, name=name, email=email)
        return await self.request("/users", "POST", json=body.model_dump(by_alias=True))

    async def get_current_user(self) -> Any:
        return await self.request("/users/me")

    # Investment settings and ETFs

    async def get_user_investment_settings(self) -> Any:
        return await self.request("/users/me/settings")

    async def update_investment_settings(self, settings: dict[str, Any]) -> Any:
        return await self.request("/users/me/settings", "PUT", json=settings)

    async def get_etfs(self) -> Any:
        return await self.request("/etfs")

    # Chat

    async def send_message(self, message: str) -> Any:
        return await self.request("/chats", "POST", json=ChatRequest(content=message).model_dump())

    async def load_chat_history(self, limit: int = 50) -> Any:
        return await self.request("/chat/history", params={"limit": limit})

    async def send_message_stream(
        self, message: str, path: str = "/chat/stream"
    ) -> AsyncIterator[StreamEvent]:
        """Stream the assistant's reply to a message as decoded events.

        Raises:
            TransportError: If the stream cannot be opened.
            StreamFailure: If reading fails after it opened.
        """
        async with self.open_stream(path, ChatRequest(content=message).model_dump()) as stream:
            async for event in iter_events(stream):
                yield event
