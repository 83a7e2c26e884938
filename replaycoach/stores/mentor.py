"""
Mentor/Progress Store.

Goals, daily progress, weekly reports and the dashboard aggregate. Same
error contract as the replay store: reads record `error` and return a
safe default, writes record `error` and re-raise.
"""

import logging

from replaycoach.api.client import ApiClient
from replaycoach.config import settings
from replaycoach.models.errors import ApiError, default_message, error_message
from replaycoach.models.mentor import (
    CoachingFocus,
    DailyProgress,
    Goal,
    GoalTemplate,
    MentorDashboard,
    WeeklyReport,
)
from replaycoach.stores.fencing import RequestFence

logger = logging.getLogger(__name__)


class MentorStore:
    """Coaching state for the authenticated user."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

        self.dashboard: MentorDashboard | None = None
        self.goals: list[Goal] = []
        self.goal_templates: list[GoalTemplate] = []
        self.progress_history: list[DailyProgress] = []
        self.weekly_report: WeeklyReport | None = None

        self.loading = False
        self.error: str | None = None

        self._fence = RequestFence()

    def _fail(self, operation: str, exc: ApiError) -> None:
        self.error = error_message(exc, default_message(operation))
        logger.info("%s failed: %r", operation, exc)

    # =========================================================================
    # READS
    # =========================================================================

    async def fetch_dashboard(self) -> MentorDashboard | None:
        """Load the dashboard; its active goals replace the local goal list."""
        token = self._fence.issue("dashboard")
        self.loading = True
        self.error = None
        try:
            dashboard = await self.client.get_mentor_dashboard()
        except ApiError as e:
            if self._fence.is_current("dashboard", token):
                self._fail("fetch_dashboard", e)
            return self.dashboard
        finally:
            self.loading = False

        if self._fence.is_current("dashboard", token):
            self.dashboard = dashboard
            self.goals = list(dashboard.active_goals)
        return self.dashboard

    async def fetch_goals(self) -> list[Goal]:
        token = self._fence.issue("goals")
        self.loading = True
        self.error = None
        try:
            data = await self.client.get_goals()
        except ApiError as e:
            if self._fence.is_current("goals", token):
                self._fail("fetch_goals", e)
            return self.goals
        finally:
            self.loading = False

        if self._fence.is_current("goals", token):
            self.goals = data.goals
            self.goal_templates = data.templates
        return self.goals

    async def fetch_progress(self, days: int | None = None) -> list[DailyProgress]:
        if days is None:
            days = settings.default_progress_days

        token = self._fence.issue("progress")
        self.loading = True
        self.error = None
        try:
            data = await self.client.get_progress(days)
        except ApiError as e:
            if self._fence.is_current("progress", token):
                self._fail("fetch_progress", e)
            return self.progress_history
        finally:
            self.loading = False

        if self._fence.is_current("progress", token):
            self.progress_history = data.progress
        return self.progress_history

    async def fetch_weekly_report(self, generate: bool = False) -> WeeklyReport | None:
        """Load the latest weekly report, asking the backend to build one if `generate`."""
        token = self._fence.issue("weekly_report")
        self.loading = True
        self.error = None
        try:
            report = await self.client.get_weekly_report(generate)
        except ApiError as e:
            if self._fence.is_current("weekly_report", token):
                self._fail("fetch_weekly_report", e)
            return self.weekly_report
        finally:
            self.loading = False

        if self._fence.is_current("weekly_report", token):
            self.weekly_report = report
        return self.weekly_report

    async def fetch_goal_templates(self) -> list[GoalTemplate]:
        # Templates are optional; a failure keeps whatever was loaded
        try:
            self.goal_templates = await self.client.get_goal_templates()
        except ApiError as e:
            logger.debug("Goal templates unavailable: %r", e)
        return self.goal_templates

    # =========================================================================
    # WRITES
    # =========================================================================

    async def create_goal(
        self,
        goal_type: str,
        metric_name: str,
        target_value: float,
        comparison: str | None = None,
    ) -> Goal:
        """
        Create a goal and append it locally.

        Raises:
            ApiError: If the backend rejects the goal (after recording `error`)
        """
        self.loading = True
        self.error = None
        try:
            goal = await self.client.create_goal(goal_type, metric_name, target_value, comparison)
        except ApiError as e:
            self._fail("create_goal", e)
            raise
        finally:
            self.loading = False

        self._fence.invalidate("goals")
        self.goals.append(goal)
        return goal

    async def delete_goal(self, goal_id: int) -> None:
        try:
            await self.client.delete_goal(goal_id)
        except ApiError as e:
            self._fail("delete_goal", e)
            raise

        self._fence.invalidate("goals")
        self.goals = [g for g in self.goals if g.id != goal_id]

    async def set_coaching_focus(self, focus_area: str, description: str) -> CoachingFocus:
        """
        Set the active coaching focus.

        The loaded dashboard, if any, picks up the new focus.

        Raises:
            ApiError: If the backend rejects the focus (after recording `error`)
        """
        self.loading = True
        self.error = None
        try:
            focus = await self.client.set_coaching_focus(focus_area, description)
        except ApiError as e:
            self._fail("set_coaching_focus", e)
            raise
        finally:
            self.loading = False

        if self.dashboard is not None:
            self.dashboard = self.dashboard.model_copy(update={"current_focus": focus})
        return focus

    def reset(self) -> None:
        """Forget everything, e.g. after logout."""
        for field in ("dashboard", "goals", "progress", "weekly_report"):
            self._fence.invalidate(field)
        self.dashboard = None
        self.goals = []
        self.goal_templates = []
        self.progress_history = []
        self.weekly_report = None
        self.error = None
