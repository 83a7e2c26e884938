"""
Replay Workflow Store.

Owns the known replays, the loaded analyses and the single pending claim,
and moves an uploaded replay through upload -> (optional) claim -> analysis.

Claim lifecycle of a replay uploaded through this store:

    UPLOADED --(needs_player_selection=false)--> READY
    UPLOADED --(needs_player_selection=true)---> AWAITING_CLAIM
    AWAITING_CLAIM --(claim succeeds)-----------> READY
    AWAITING_CLAIM --(clear_pending_claim)------> DISMISSED
    AWAITING_CLAIM --(another replay claimed)---> DISMISSED

READY and DISMISSED are terminal.

ERROR CONTRACT:
- Reads (list, analysis, replay, trends) record `error` and return a safe
  default. They never raise.
- Writes (upload, claim, remove) record `error` and re-raise ApiError.
- Strategic analysis is optional: its failures never touch `error`.
"""

import logging
from enum import Enum

from replaycoach.api.client import ApiClient, ReplayFile
from replaycoach.config import MAX_PAGE_SIZE, MIN_PAGE_SIZE, settings
from replaycoach.models.analysis import ReplayAnalysis, StrategicAnalysisResponse
from replaycoach.models.errors import ApiError, default_message, error_message
from replaycoach.models.replay import ClaimResult, Replay, TrendData, UploadResult
from replaycoach.stores.fencing import RequestFence

logger = logging.getLogger(__name__)


class ClaimState(str, Enum):
    """Where an uploaded replay stands in the claim workflow."""

    UPLOADED = "uploaded"
    READY = "ready"
    AWAITING_CLAIM = "awaiting_claim"
    DISMISSED = "dismissed"


class ReplayStore:
    """
    Observable replay state plus the operations that mutate it.

    Every field is written only by this store's own operations; views read
    them freely. Construct one per session and pass it to consumers.
    """

    def __init__(self, client: ApiClient) -> None:
        self.client = client

        self.replays: list[Replay] = []
        self.total = 0
        self.current_analysis: ReplayAnalysis | None = None
        self.strategic_analysis: StrategicAnalysisResponse | None = None
        self.pending_claim: Replay | None = None

        self.loading = False
        self.loading_strategic = False
        self.error: str | None = None

        self.claim_states: dict[int, ClaimState] = {}
        self._fence = RequestFence()

    # =========================================================================
    # COLLECTION
    # =========================================================================

    async def list_replays(self, limit: int | None = None, offset: int = 0) -> list[Replay]:
        """
        Load one page of replays.

        `limit` is clamped to the page sizes the backend honours. On failure
        the list is cleared rather than left stale.

        Returns:
            The replays now held by the store
        """
        if limit is None:
            limit = settings.default_page_size
        limit = min(max(limit, MIN_PAGE_SIZE), MAX_PAGE_SIZE)

        token = self._fence.issue("replays")
        self.loading = True
        self.error = None
        try:
            page = await self.client.list_replays(limit, offset)
        except ApiError as e:
            if self._fence.is_current("replays", token):
                self.error = error_message(e, default_message("list_replays"))
                self.replays = []
                logger.info("Listing replays failed: %r", e)
            else:
                logger.debug("Discarding stale replay list failure")
        else:
            if self._fence.is_current("replays", token):
                self.replays = page.replays
                self.total = page.total
            else:
                logger.debug("Discarding stale replay list response")
        finally:
            self.loading = False

        return self.replays

    async def remove(self, replay_id: int) -> None:
        """
        Delete a replay remotely, then drop it from the local list.

        The local list is left alone if the remote delete fails.
        """
        try:
            await self.client.delete_replay(replay_id)
        except ApiError as e:
            self.error = error_message(e, default_message("remove"))
            logger.warning("Deleting replay %d failed: %r", replay_id, e)
            raise

        # A list request started before the delete would bring the replay back
        self._fence.invalidate("replays")
        self.replays = [r for r in self.replays if r.id != replay_id]
        self.total = max(0, self.total - 1)

    async def get_replay(self, replay_id: int) -> Replay | None:
        self.error = None
        try:
            return await self.client.get_replay(replay_id)
        except ApiError as e:
            self.error = error_message(e, default_message("get_replay"))
            logger.info("Loading replay %d failed: %r", replay_id, e)
            return None

    # =========================================================================
    # UPLOAD AND CLAIM
    # =========================================================================

    async def upload(self, file: ReplayFile, filename: str | None = None) -> UploadResult:
        """
        Upload a replay and refresh the list.

        Size and type checks are left to the backend.

        Args:
            file: Path, raw bytes or binary file object
            filename: Name sent to the backend; derived from the file when omitted

        Returns:
            The UploadResult. When it needs player selection the replay
            becomes the pending claim.

        Raises:
            ApiError: If the upload fails (after recording `error`)
        """
        self.loading = True
        self.error = None
        try:
            result = await self.client.upload_replay(file, filename)
            self.claim_states[result.replay_id] = ClaimState.UPLOADED
            await self.list_replays()
        except ApiError as e:
            self.error = error_message(e, default_message("upload"))
            logger.warning("Replay upload failed: %r", e)
            raise
        finally:
            self.loading = False

        if result.needs_player_selection:
            if self.pending_claim is not None and self.pending_claim.id != result.replay.id:
                logger.info(
                    "Replay %d replaces unresolved pending claim for replay %d",
                    result.replay.id,
                    self.pending_claim.id,
                )
            self.pending_claim = result.replay
            self.claim_states[result.replay_id] = ClaimState.AWAITING_CLAIM
        else:
            self.claim_states[result.replay_id] = ClaimState.READY

        logger.info("Uploaded replay %d: %s", result.replay_id, result.message)
        return result

    async def claim(self, replay_id: int, player_id: int) -> ClaimResult:
        """
        Tell the backend which recorded player the current user was.

        Clears the pending claim on success, whichever replay it held:
        there is only ever one pending claim. A different pending replay is
        dismissed.

        Raises:
            ApiError: If the claim fails (after recording `error`)
        """
        try:
            result = await self.client.claim_replay(replay_id, player_id)
        except ApiError as e:
            self.error = error_message(e, default_message("claim"))
            logger.warning("Claiming replay %d as player %d failed: %r", replay_id, player_id, e)
            raise

        if self.pending_claim is not None and self.pending_claim.id != replay_id:
            self.clear_pending_claim()
        self.pending_claim = None
        if self.claim_states.get(replay_id) is ClaimState.AWAITING_CLAIM:
            self.claim_states[replay_id] = ClaimState.READY
        return result

    def clear_pending_claim(self) -> None:
        """Dismiss the player prompt without resolving it."""
        pending = self.pending_claim
        if pending is not None and self.claim_states.get(pending.id) is ClaimState.AWAITING_CLAIM:
            self.claim_states[pending.id] = ClaimState.DISMISSED
        self.pending_claim = None

    def claim_state(self, replay_id: int) -> ClaimState | None:
        """Lifecycle state, or None for replays this store never uploaded."""
        return self.claim_states.get(replay_id)

    # =========================================================================
    # ANALYSIS
    # =========================================================================

    async def fetch_analysis(self, replay_id: int) -> ReplayAnalysis | None:
        token = self._fence.issue("analysis")
        self.loading = True
        self.error = None
        try:
            analysis = await self.client.get_replay_analysis(replay_id)
        except ApiError as e:
            analysis = None
            if self._fence.is_current("analysis", token):
                self.error = error_message(e, default_message("fetch_analysis"))
                logger.info("Loading analysis for replay %d failed: %r", replay_id, e)
        finally:
            self.loading = False

        if not self._fence.is_current("analysis", token):
            logger.debug("Discarding stale analysis for replay %d", replay_id)
            return self.current_analysis

        self.current_analysis = analysis
        return analysis

    async def fetch_strategic_analysis(self, replay_id: int) -> StrategicAnalysisResponse | None:
        """Best effort: a failure empties the field but leaves `error` alone."""
        token = self._fence.issue("strategic")
        self.loading_strategic = True
        try:
            analysis = await self.client.get_strategic_analysis(replay_id)
        except ApiError as e:
            analysis = None
            logger.debug("Strategic analysis for replay %d unavailable: %r", replay_id, e)
        finally:
            self.loading_strategic = False

        if not self._fence.is_current("strategic", token):
            logger.debug("Discarding stale strategic analysis for replay %d", replay_id)
            return self.strategic_analysis

        self.strategic_analysis = analysis
        return analysis

    async def fetch_trends(self, player_id: int, limit: int = 20) -> dict[str, TrendData]:
        self.error = None
        try:
            return await self.client.get_trends(player_id, limit)
        except ApiError as e:
            self.error = error_message(e, default_message("fetch_trends"))
            logger.info("Loading trends for player %d failed: %r", player_id, e)
            return {}
