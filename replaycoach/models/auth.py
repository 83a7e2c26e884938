from datetime import datetime

from pydantic import BaseModel


class User(BaseModel):
    """The authenticated account as the backend exposes it."""

    id: int
    email: str
    sc2_player_name: str
    created_at: datetime | None = None
    last_login: datetime | None = None


class AuthResponse(BaseModel):
    """Returned by login and register."""

    token: str
    user: User
