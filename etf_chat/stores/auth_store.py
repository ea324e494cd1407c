"""In-memory credential holder.

Supplies the Authorization header for the transport client. Tokens are
kept for the lifetime of the process only.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class AuthStore:
    """Current user and bearer token."""

    def __init__(self) -> None:
        self.user: dict[str, Any] | None = None
        self.token: str | None = None
        self.is_authenticated: bool = False

    def login(self, user: dict[str, Any], token: str) -> None:
        self.user = dict(user)
        self.token = token
        self.is_authenticated = True
        logger.info(f"Signed in as {user.get('name') or user.get('userId') or 'unknown user'}")

    def logout(self) -> None:
        self.user = None
        self.token = None
        self.is_authenticated = False

    def update_user(self, fields: dict[str, Any]) -> None:
        """Merge fields into the current user record."""
        self.user = {**(self.user or {}), **fields}

    def get_auth_headers(self) -> dict[str, str]:
        """Return the bearer header, or an empty mapping when signed out."""
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
