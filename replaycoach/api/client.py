"""
Transport gateway for the replay dashboard backend.

A single configured httpx.AsyncClient performs every request against the
fixed API base. The bearer credential is a client-wide default header,
attached and removed as a whole, never per request.

Every method raises ApiError on failure and returns a typed contract on
success.
"""

import logging
from os import PathLike
from pathlib import Path
from typing import IO, Any, TypeVar

import httpx
from pydantic import TypeAdapter

from replaycoach.config import UPLOAD_FIELD_NAME, settings
from replaycoach.models.analysis import ReplayAnalysis, StrategicAnalysisResponse
from replaycoach.models.auth import AuthResponse, User
from replaycoach.models.errors import ApiError, ErrorKind, normalize_error
from replaycoach.models.mentor import (
    CoachingFocus,
    Goal,
    GoalList,
    GoalTemplate,
    MentorDashboard,
    ProgressHistory,
    WeeklyReport,
)
from replaycoach.models.replay import (
    ClaimResult,
    Replay,
    ReplayPage,
    TrendData,
    TrendsResponse,
    UploadResult,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

ReplayFile = str | PathLike[str] | bytes | IO[bytes]

DEFAULT_UPLOAD_FILENAME = "replay.SC2Replay"


class ApiClient:
    """
    Typed client for the /api/v1 surface.

    Usable as an async context manager; otherwise call `close()`.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            base_url: API base URL. Defaults to settings.api_base_url.
            timeout: Per-request timeout in seconds. Defaults to settings.request_timeout.
            transport: Optional httpx transport (tests inject ASGITransport here)
        """
        self.base_url = base_url or settings.api_base_url
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # =========================================================================
    # AUTH HEADER
    # =========================================================================

    def set_auth_token(self, token: str | None) -> None:
        """Attach the bearer credential to all later requests, or remove it."""
        if token:
            self._client.headers["Authorization"] = f"Bearer {token}"
        else:
            self._client.headers.pop("Authorization", None)

    @property
    def has_auth_token(self) -> bool:
        return "Authorization" in self._client.headers

    # =========================================================================
    # REQUEST PLUMBING
    # =========================================================================

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            api_error = normalize_error(exc)
            logger.debug("%s %s failed: %r", method, path, api_error)
            raise api_error from exc
        return response

    async def _request(self, method: str, path: str, model: type[T], **kwargs: Any) -> T:
        response = await self._send(method, path, **kwargs)
        try:
            return TypeAdapter(model).validate_python(response.json())
        except ValueError as exc:
            # Covers undecodable JSON and pydantic ValidationError alike
            raise normalize_error(exc) from exc

    # =========================================================================
    # REPLAYS
    # =========================================================================

    async def upload_replay(self, file: ReplayFile, filename: str | None = None) -> UploadResult:
        """
        Upload a replay file as multipart field `replay`.

        Args:
            file: Path, raw bytes or a binary file object
            filename: Name sent to the backend; derived from the file when omitted

        Returns:
            UploadResult with the created (or already known) replay
        """
        name, content = _read_replay_file(file, filename)
        files = {UPLOAD_FIELD_NAME: (name, content, "application/octet-stream")}
        return await self._request("POST", "/replays/upload", UploadResult, files=files)

    async def claim_replay(self, replay_id: int, player_id: int) -> ClaimResult:
        return await self._request(
            "POST",
            f"/replays/{replay_id}/claim",
            ClaimResult,
            json={"player_id": player_id},
        )

    async def delete_replay(self, replay_id: int) -> None:
        # Body is ignored; the backend answers 204 or 200 with a message
        await self._send("DELETE", f"/replays/{replay_id}")

    async def list_replays(self, limit: int = 20, offset: int = 0) -> ReplayPage:
        return await self._request(
            "GET",
            "/replays",
            ReplayPage,
            params={"limit": limit, "offset": offset},
        )

    async def get_replay(self, replay_id: int) -> Replay:
        return await self._request("GET", f"/replays/{replay_id}", Replay)

    async def get_replay_analysis(self, replay_id: int) -> ReplayAnalysis:
        return await self._request("GET", f"/replays/{replay_id}/analysis", ReplayAnalysis)

    async def get_strategic_analysis(self, replay_id: int) -> StrategicAnalysisResponse:
        return await self._request(
            "GET", f"/replays/{replay_id}/strategic", StrategicAnalysisResponse
        )

    async def get_trends(self, player_id: int, limit: int = 20) -> dict[str, TrendData]:
        data = await self._request(
            "GET",
            "/stats/trends",
            TrendsResponse,
            params={"player_id": player_id, "limit": limit},
        )
        return data.trends

    # =========================================================================
    # AUTH
    # =========================================================================

    async def register(self, email: str, password: str, sc2_player_name: str) -> AuthResponse:
        return await self._request(
            "POST",
            "/auth/register",
            AuthResponse,
            json={"email": email, "password": password, "sc2_player_name": sc2_player_name},
        )

    async def login(self, email: str, password: str) -> AuthResponse:
        return await self._request(
            "POST",
            "/auth/login",
            AuthResponse,
            json={"email": email, "password": password},
        )

    async def logout(self) -> None:
        await self._send("POST", "/auth/logout")

    async def get_me(self) -> User:
        return await self._request("GET", "/auth/me", User)

    # =========================================================================
    # MENTOR
    # =========================================================================

    async def get_mentor_dashboard(self) -> MentorDashboard:
        return await self._request("GET", "/mentor/dashboard", MentorDashboard)

    async def get_goals(self) -> GoalList:
        return await self._request("GET", "/mentor/goals", GoalList)

    async def create_goal(
        self,
        goal_type: str,
        metric_name: str,
        target_value: float,
        comparison: str | None = None,
    ) -> Goal:
        payload: dict[str, Any] = {
            "goal_type": goal_type,
            "metric_name": metric_name,
            "target_value": target_value,
        }
        if comparison is not None:
            payload["comparison"] = comparison
        return await self._request("POST", "/mentor/goals", Goal, json=payload)

    async def delete_goal(self, goal_id: int) -> None:
        await self._send("DELETE", f"/mentor/goals/{goal_id}")

    async def get_progress(self, days: int = 14) -> ProgressHistory:
        return await self._request(
            "GET", "/mentor/progress", ProgressHistory, params={"days": days}
        )

    async def get_weekly_report(self, generate: bool = False) -> WeeklyReport:
        return await self._request(
            "GET",
            "/mentor/weekly-report",
            WeeklyReport,
            params={"generate": "true" if generate else "false"},
        )

    async def set_coaching_focus(self, focus_area: str, description: str) -> CoachingFocus:
        return await self._request(
            "POST",
            "/mentor/focus",
            CoachingFocus,
            json={"focus_area": focus_area, "description": description},
        )

    async def get_goal_templates(self) -> list[GoalTemplate]:
        return await self._request("GET", "/mentor/goal-templates", list[GoalTemplate])

    # =========================================================================
    # HEALTH
    # =========================================================================

    async def health_check(self) -> bool:
        """
        Check if the backend is reachable.

        Returns:
            True if the backend answered 200, False otherwise
        """
        try:
            await self._send("GET", "/health")
        except ApiError:
            return False
        return True


def _read_replay_file(file: ReplayFile, filename: str | None) -> tuple[str, bytes]:
    """Resolve an upload argument into (filename, content)."""
    if isinstance(file, bytes):
        return filename or DEFAULT_UPLOAD_FILENAME, file

    if isinstance(file, (str, PathLike)):
        path = Path(file)
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise ApiError(
                ErrorKind.UNKNOWN, detail=f"Failed to read replay file '{path}': {exc}"
            ) from exc
        return filename or path.name, content

    try:
        content = file.read()
    except OSError as exc:
        raise ApiError(ErrorKind.UNKNOWN, detail=f"Failed to read replay file: {exc}") from exc
    name = filename or Path(getattr(file, "name", "") or DEFAULT_UPLOAD_FILENAME).name
    return name, content
