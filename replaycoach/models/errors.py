"""
Error Normalization: Typed Failures at the Transport Boundary.

Every remote call that fails is turned into an ApiError by
`normalize_error()` before any store sees it. Stores never introspect
httpx exceptions or response bodies themselves.

Failure kinds:
- Network: no response arrived (connection refused, DNS, timeout)
- BackendReported: the backend answered with a JSON `error` text
- Unknown: anything else (bare status code, unreadable body, bad shape)

INVARIANT: `normalize_error()` and `error_message()` never raise and the
latter always yields a displayable string.
"""

from enum import Enum
from typing import Any

import httpx


class ErrorKind(str, Enum):
    """Classification of remote failures."""

    NETWORK = "network"
    BACKEND_REPORTED = "backend_reported"
    UNKNOWN = "unknown"


class ApiError(Exception):
    """
    The only exception the transport gateway raises.

    Attributes:
        kind: What class of failure this is
        message: Backend-reported text, present only for BACKEND_REPORTED
        status_code: HTTP status when a response arrived
        detail: Technical description for logs, never shown to users
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        status_code: int | None = None,
        detail: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(message or detail or kind.value)

    @property
    def is_network(self) -> bool:
        return self.kind is ErrorKind.NETWORK

    def __repr__(self) -> str:
        return (
            f"ApiError(kind={self.kind.value!r}, message={self.message!r}, "
            f"status_code={self.status_code!r})"
        )


# =============================================================================
# OPERATION DEFAULT MESSAGES
# =============================================================================
#
# Shown whenever the backend did not explain the failure itself.
#
# =============================================================================

DEFAULT_MESSAGES: dict[str, str] = {
    "list_replays": "Failed to load replays",
    "get_replay": "Failed to load replay",
    "fetch_analysis": "Failed to load analysis",
    "fetch_trends": "Failed to load trends",
    "upload": "Upload failed",
    "claim": "Failed to claim replay",
    "remove": "Failed to delete replay",
    "fetch_dashboard": "Failed to load dashboard",
    "fetch_goals": "Failed to load goals",
    "create_goal": "Failed to create goal",
    "delete_goal": "Failed to delete goal",
    "fetch_progress": "Failed to load progress",
    "fetch_weekly_report": "Failed to load weekly report",
    "set_coaching_focus": "Failed to set coaching focus",
    "login": "Login failed",
    "register": "Registration failed",
}

FALLBACK_MESSAGE = "Request failed"


def _backend_error_text(response: httpx.Response) -> str | None:
    """Pull the `error` text out of a JSON error body, if there is one."""
    try:
        body: Any = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    text = body.get("error")
    if isinstance(text, str) and text.strip():
        return text
    return None


def normalize_error(exc: BaseException) -> ApiError:
    """
    Classify any failure value into an ApiError.

    Args:
        exc: Whatever the transport call raised

    Returns:
        ApiError; `exc` itself when it already is one
    """
    if isinstance(exc, ApiError):
        return exc

    try:
        if isinstance(exc, httpx.HTTPStatusError):
            status_code = exc.response.status_code
            text = _backend_error_text(exc.response)
            if text is not None:
                return ApiError(ErrorKind.BACKEND_REPORTED, text, status_code=status_code)
            return ApiError(
                ErrorKind.UNKNOWN,
                status_code=status_code,
                detail=f"HTTP {status_code}",
            )

        if isinstance(exc, httpx.RequestError):
            return ApiError(ErrorKind.NETWORK, detail=f"{type(exc).__name__}: {exc}")

        return ApiError(ErrorKind.UNKNOWN, detail=f"{type(exc).__name__}: {exc}")
    except Exception:
        # str() on a hostile exception is the only thing above that can fail
        return ApiError(ErrorKind.UNKNOWN, detail=type(exc).__name__)


def error_message(error: BaseException | None, default: str) -> str:
    """
    Displayable text for a failure.

    Args:
        error: Any failure value (normalized here if it is not an ApiError)
        default: Operation-specific message used when the backend gave none

    Returns:
        The backend-reported text, else `default`
    """
    if error is None:
        return default or FALLBACK_MESSAGE
    api_error = normalize_error(error)
    if api_error.kind is ErrorKind.BACKEND_REPORTED and api_error.message:
        return api_error.message
    return default or FALLBACK_MESSAGE


def default_message(operation: str) -> str:
    """Default failure text for a named store operation."""
    return DEFAULT_MESSAGES.get(operation, FALLBACK_MESSAGE)
