"""HTTP layer: the backend transport client and the hosting app.

Endpoints consumed:
    - POST /auth/login, POST /users, GET /users/me
    - GET/PUT /users/me/settings, GET /etfs
    - POST /chats, GET /chat/history
    - POST /chat/stream: line-framed streamed reply

Endpoints served:
    - GET /health: Service health status
"""

from etf_chat.api.client import (
    ApiClient,
    ByteStream,
    CredentialProvider,
    StreamFailure,
    TransportError,
)

__all__ = ["ApiClient", "ByteStream", "CredentialProvider", "StreamFailure", "TransportError"]
