"""
Auth Store.

Login, registration and session checks. All operations report success as
a boolean and keep failure text in `error`; none of them raise.
"""

import logging

from replaycoach.models.auth import User
from replaycoach.models.errors import ApiError, default_message, error_message
from replaycoach.session import Session

logger = logging.getLogger(__name__)


class AuthStore:
    """Drives a Session through the /auth endpoints."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.loading = False
        self.error: str | None = None

    @property
    def user(self) -> User | None:
        return self.session.user

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    async def login(self, email: str, password: str) -> bool:
        self.loading = True
        self.error = None
        try:
            auth = await self.session.client.login(email, password)
        except ApiError as e:
            self.error = error_message(e, default_message("login"))
            logger.info("Login failed for %s: %r", email, e)
            return False
        finally:
            self.loading = False

        self.session.save(auth)
        return True

    async def register(self, email: str, password: str, sc2_player_name: str) -> bool:
        self.loading = True
        self.error = None
        try:
            auth = await self.session.client.register(email, password, sc2_player_name)
        except ApiError as e:
            self.error = error_message(e, default_message("register"))
            logger.info("Registration failed for %s: %r", email, e)
            return False
        finally:
            self.loading = False

        self.session.save(auth)
        return True

    async def logout(self) -> None:
        """End the session locally even if the backend cannot be told."""
        try:
            await self.session.client.logout()
        except ApiError as e:
            logger.debug("Remote logout failed, clearing session anyway: %r", e)
        self.session.clear()

    async def check_auth(self) -> bool:
        """
        Verify the held token against the backend.

        Returns:
            True with the user refreshed, False (session cleared) otherwise
        """
        if not self.session.token:
            return False

        try:
            user = await self.session.client.get_me()
        except ApiError as e:
            logger.info("Stored token rejected: %r", e)
            self.session.clear()
            return False

        self.session.set_user(user)
        return True
