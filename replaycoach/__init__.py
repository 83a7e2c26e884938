from replaycoach.api.client import ApiClient
from replaycoach.models.errors import ApiError, ErrorKind
from replaycoach.session import Session
from replaycoach.stores import AuthStore, ClaimState, MentorStore, ReplayStore

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthStore",
    "ClaimState",
    "ErrorKind",
    "MentorStore",
    "ReplayStore",
    "Session",
]
