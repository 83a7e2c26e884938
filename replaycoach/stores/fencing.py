"""
Request fencing for store fields.

Concurrent calls to the same store operation may resolve out of order.
Each call takes a token for the field it writes; when it resolves, it only
writes if its token is still the newest one issued for that field.
"""


class RequestFence:
    """Monotonic per-field request tokens."""

    def __init__(self) -> None:
        self._latest: dict[str, int] = {}

    def issue(self, field: str) -> int:
        """Start a request writing `field` and return its token."""
        token = self._latest.get(field, 0) + 1
        self._latest[field] = token
        return token

    def is_current(self, field: str, token: int) -> bool:
        """True if no newer request for `field` has been issued since `token`."""
        return self._latest.get(field, 0) == token

    def invalidate(self, field: str) -> None:
        """Make every in-flight request for `field` stale."""
        self.issue(field)
