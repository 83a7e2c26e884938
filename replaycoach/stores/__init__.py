from replaycoach.stores.auth import AuthStore
from replaycoach.stores.fencing import RequestFence
from replaycoach.stores.mentor import MentorStore
from replaycoach.stores.replays import ClaimState, ReplayStore

__all__ = [
    "AuthStore",
    "ClaimState",
    "MentorStore",
    "ReplayStore",
    "RequestFence",
]
