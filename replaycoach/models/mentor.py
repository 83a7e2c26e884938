"""
Mentor response contracts.

Goals, daily progress, weekly reports and the aggregated dashboard.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from replaycoach.models.auth import User
from replaycoach.models.fields import NullableList


class Goal(BaseModel):
    """
    A player goal tracked by the backend.

    Attributes:
        goal_type: "daily" or "weekly"
        metric_name: apm, supply_block, games_played, win_rate or sq
        comparison: one of >=, <=, >, <, =
        status: active, completed or failed
    """

    id: int
    user_id: int
    goal_type: str
    metric_name: str
    target_value: float
    comparison: str = ">="
    current_value: float = 0.0
    status: str = "active"
    created_at: datetime | None = None
    deadline: datetime | None = None

    def progress_percent(self) -> float:
        """Progress toward the target, 100 when reached."""
        if self.target_value == 0:
            return 0.0
        # "Less than" goals are met from above
        if self.comparison in ("<=", "<"):
            if self.current_value <= self.target_value:
                return 100.0
            return self.target_value / self.current_value * 100
        return self.current_value / self.target_value * 100

    def is_achieved(self) -> bool:
        current, target = self.current_value, self.target_value
        if self.comparison == "<=":
            return current <= target
        if self.comparison == ">":
            return current > target
        if self.comparison == "<":
            return current < target
        if self.comparison == "=":
            return current == target
        return current >= target


class GoalTemplate(BaseModel):
    """Predefined goal with beginner and advanced targets."""

    name: str
    goal_type: str
    metric_name: str
    comparison: str
    beginner: float
    advanced: float
    description: str = ""


class GoalList(BaseModel):
    goals: NullableList[Goal] = Field(default_factory=list)
    templates: NullableList[GoalTemplate] = Field(default_factory=list)


class DailyProgress(BaseModel):
    id: int
    user_id: int
    date: datetime
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    avg_apm: float = 0.0
    avg_spending_quotient: float = 0.0
    avg_supply_block_pct: float = 0.0
    total_play_time: int = Field(default=0, description="Seconds")


class ProgressHistory(BaseModel):
    progress: NullableList[DailyProgress] = Field(default_factory=list)
    days: int = 0


class WeekStats(BaseModel):
    """Aggregates for the current week, with deltas to the previous one."""

    games_played: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0
    avg_apm: float = 0.0
    avg_sq: float = 0.0
    avg_supply_block: float = 0.0
    total_play_time: int = 0
    apm_change: float = 0.0
    sq_change: float = 0.0
    win_rate_change: float = 0.0
    supply_block_change: float = 0.0


class RecentGame(BaseModel):
    replay_id: int
    map: str
    result: str
    race: str
    enemy_race: str = ""
    apm: float = 0.0
    sq: float = 0.0
    duration: int = 0
    played_at: datetime | None = None


class CoachingFocus(BaseModel):
    id: int
    user_id: int
    focus_area: str  # macro, micro, economy, army_control, scouting
    description: str = ""
    started_at: datetime | None = None
    active: bool = True


class WeeklyReport(BaseModel):
    id: int
    user_id: int
    week_start: datetime
    week_end: datetime
    total_games: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0
    avg_apm: float = 0.0
    avg_sq: float = 0.0
    avg_supply_block: float = 0.0
    main_race: str = ""
    total_play_time: int = 0
    improvements: dict[str, str] | None = None
    regressions: dict[str, str] | None = None
    focus_suggestion: str = ""
    strengths: list[str] | None = None
    weaknesses: list[str] | None = None
    generated_at: datetime | None = None


class MentorDashboard(BaseModel):
    """Everything the mentor landing page shows, in one response."""

    user: User
    today_stats: DailyProgress | None = None
    week_stats: WeekStats | None = None
    active_goals: NullableList[Goal] = Field(default_factory=list)
    recent_games: NullableList[RecentGame] = Field(default_factory=list)
    current_focus: CoachingFocus | None = None
    weekly_report: WeeklyReport | None = None
    progress_trend: NullableList[DailyProgress] = Field(default_factory=list)
