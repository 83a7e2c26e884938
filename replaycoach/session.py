"""
In-memory session context.

Holds the bearer token and the current user. Nothing is written to disk;
callers that want persistence store the token themselves and hand it back
through `restore()`.
"""

import logging

from replaycoach.api.client import ApiClient
from replaycoach.models.auth import AuthResponse, User

logger = logging.getLogger(__name__)


class Session:
    """Current credential and identity, bound to one ApiClient."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.token: str | None = None
        self.user: User | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.user is not None

    def save(self, auth: AuthResponse) -> None:
        """Adopt a fresh login or registration."""
        self.token = auth.token
        self.user = auth.user
        self.client.set_auth_token(auth.token)
        logger.info("Session started for %s", auth.user.email)

    def restore(self, token: str, user: User | None = None) -> None:
        """Reuse a token obtained earlier; the user may be resolved later."""
        self.token = token
        self.user = user
        self.client.set_auth_token(token)

    def set_user(self, user: User) -> None:
        self.user = user

    def clear(self) -> None:
        self.token = None
        self.user = None
        self.client.set_auth_token(None)
